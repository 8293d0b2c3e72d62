"""
Root scanning.

Enumerates every resource name contained in a root without reading any
resource content. Directory roots are walked with os.walk; archive roots
are listed from the zip central directory.
"""

import logging
import os
import zipfile
from typing import Dict, FrozenSet, List

from pathindex import names
from pathindex.errors import UnsupportedRootError
from pathindex.roots import Root, RootKind

logger = logging.getLogger(__name__)


def scan_directory(root: Root) -> List[str]:
    """
    Walk a directory root and collect resource names.

    Intermediate directories are collected with a trailing "/" so that
    package-like directory lookups succeed. The root itself is never
    collected.

    Args:
        root: Directory root

    Returns:
        Resource names in sorted walk order

    Raises:
        UnsupportedRootError: if any part of the tree cannot be listed
    """
    prefix = root.prefix
    prefix_len = len(prefix)

    def _raise(error: OSError) -> None:
        raise UnsupportedRootError(str(root.path), f"cannot list {error.filename}: {error.strerror}")

    # Real paths of each walked directory and its ancestors; a symlink back
    # into that chain is listed but not descended into.
    chains: Dict[str, FrozenSet[str]] = {prefix: frozenset([os.path.realpath(prefix)])}

    found: List[str] = []
    for dirpath, dirnames, filenames in os.walk(prefix, onerror=_raise, followlinks=True):
        dirnames.sort()
        chain = chains.pop(dirpath)
        if len(dirpath) > prefix_len:  # Don't index the root itself.
            found.append(names.from_relpath(dirpath[prefix_len:], is_dir=True))
        for fname in sorted(filenames):
            found.append(names.from_relpath(os.path.join(dirpath, fname)[prefix_len:]))

        descend = []
        for dname in dirnames:
            full = os.path.join(dirpath, dname)
            real = os.path.realpath(full)
            if real in chain:
                logger.debug("Not following cyclic link %s -> %s", full, real)
                found.append(names.from_relpath(full[prefix_len:], is_dir=True))
                continue
            chains[full] = chain | {real}
            descend.append(dname)
        dirnames[:] = descend
    return found


def scan_archive(root: Root) -> List[str]:
    """
    List the entry names of a zip archive root.

    Entry names are already relative and "/"-separated, so they are
    collected unchanged. Nothing is extracted.
    """
    try:
        with zipfile.ZipFile(root.path) as archive:
            return archive.namelist()
    except (OSError, zipfile.BadZipFile) as e:
        raise UnsupportedRootError(str(root.path), f"cannot read archive ({e})") from e


def scan_root(root: Root) -> List[str]:
    """Collect every resource name in a root, dispatching on its kind."""
    if root.kind is RootKind.DIRECTORY:
        found = scan_directory(root)
    elif root.kind is RootKind.ARCHIVE:
        found = scan_archive(root)
    else:
        raise UnsupportedRootError(str(root.path), f"unknown root kind {root.kind}")
    logger.debug("Scanned %s: %d names", root.uri, len(found))
    return found
