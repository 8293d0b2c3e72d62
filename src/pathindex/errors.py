"""
Exception taxonomy for pathindex.

Scan-time errors (UnsupportedRootError, DuplicateResourceError) abort the
add_root call that raised them. ResourceReadError is raised per lookup and
never touches index state. Absence is not an error: lookups return None.
"""

from typing import Optional


class PathIndexError(Exception):
    """Base class for all pathindex errors."""


class ConfigError(PathIndexError):
    """Raised when a .pathindex.yaml file cannot be read or is invalid."""


class UnsupportedRootError(PathIndexError):
    """Raised when a search-path root is neither a directory nor a zip archive."""

    def __init__(self, root: str, reason: str):
        super().__init__(f"Unsupported search path root {root}: {reason}")
        self.root = root
        self.reason = reason


class DuplicateResourceError(PathIndexError):
    """Raised in strict mode when a later root shadows an already indexed name."""

    def __init__(self, name: str, existing_origin: str, conflicting_origin: str):
        super().__init__(
            f"Resource {name} in {conflicting_origin} is also in {existing_origin}"
        )
        self.name = name
        self.existing_origin = existing_origin
        self.conflicting_origin = conflicting_origin


class ResourceReadError(PathIndexError):
    """Raised when an indexed resource can no longer be read from its root."""

    def __init__(self, name: str, origin: str, cause: Optional[BaseException] = None):
        message = f"Failed to read resource {name} from {origin}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.name = name
        self.origin = origin
        self.cause = cause
