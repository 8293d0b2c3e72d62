"""
Resource name helpers.

Resource names are relative paths that always use "/" as separator,
independent of os.sep. Directory names carry a trailing "/":

    pkg/sub/        directory
    pkg/sub/a.txt   file
"""

import os

SEPARATOR = "/"


def normalize(name: str) -> str:
    """Convert OS and backslash separators in a query name to "/"."""
    if os.sep != SEPARATOR:
        name = name.replace(os.sep, SEPARATOR)
    return name.replace("\\", SEPARATOR)


def from_relpath(relpath: str, is_dir: bool = False) -> str:
    """
    Build a resource name from a path relative to a directory root.

    Only os.sep is rewritten; on POSIX a backslash is an ordinary file name
    character and is kept.
    """
    name = relpath.replace(os.sep, SEPARATOR) if os.sep != SEPARATOR else relpath
    if is_dir and not name.endswith(SEPARATOR):
        name += SEPARATOR
    return name


def is_directory_name(name: str) -> bool:
    return name.endswith(SEPARATOR)


def strip_separator(name: str) -> str:
    """Drop exactly one trailing separator."""
    if name.endswith(SEPARATOR):
        return name[: -len(SEPARATOR)]
    return name
