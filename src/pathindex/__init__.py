"""
pathindex - indexed resource lookup across ordered search paths.

Scans every directory and zip archive root once, then answers
single-resource lookups from an in-memory name index.
"""

from pathindex.errors import (
    ConfigError,
    DuplicateResourceError,
    PathIndexError,
    ResourceReadError,
    UnsupportedRootError,
)
from pathindex.index import ResourceIndex
from pathindex.resolver import ArchiveResolver, DirectoryResolver, Resource
from pathindex.roots import Root, RootKind
from pathindex.search_path import SearchPath

__version__ = "0.1.0"

__all__ = [
    "ArchiveResolver",
    "ConfigError",
    "DirectoryResolver",
    "DuplicateResourceError",
    "PathIndexError",
    "Resource",
    "ResourceIndex",
    "ResourceReadError",
    "Root",
    "RootKind",
    "SearchPath",
    "UnsupportedRootError",
]
