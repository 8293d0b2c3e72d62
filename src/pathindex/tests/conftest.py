"""
Shared fixtures for pathindex tests.
"""
from pathindex.tests.shared_fixtures import *  # noqa: F401,F403
