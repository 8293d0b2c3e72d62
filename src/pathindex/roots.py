"""
Search-path roots.

A root is one element of the ordered search path: a directory or a zip
archive (.zip, .jar, .whl, ...). Roots are classified once, when they are
created, and are immutable afterwards.
"""
from __future__ import annotations

import os
import re
import zipfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Union
from urllib.parse import unquote, urlparse
from urllib.request import url2pathname

from pathindex.errors import UnsupportedRootError

# Single-letter schemes are Windows drive letters, not URLs.
_URL_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]+:")


class RootKind(Enum):
    DIRECTORY = "directory"
    ARCHIVE = "archive"


@dataclass(frozen=True)
class Root:
    """One classified search-path element."""

    path: Path
    kind: RootKind

    @property
    def uri(self) -> str:
        """Origin descriptor used for provenance and diagnostics."""
        return self.path.as_uri()

    @property
    def prefix(self) -> str:
        """Root path ending with os.sep; its length is the relativization cut."""
        return os.path.join(str(self.path), "")

    @classmethod
    def from_spec(cls, spec: Union[str, Path, "Root"]) -> "Root":
        """
        Classify a root descriptor.

        Args:
            spec: Filesystem path, file: URL, or an existing Root

        Returns:
            Root with an absolute path

        Raises:
            UnsupportedRootError: if the descriptor is not a local directory
                or a readable zip archive
        """
        if isinstance(spec, Root):
            return spec

        raw = str(spec)
        if isinstance(spec, str) and _URL_PATTERN.match(spec):
            parsed = urlparse(spec)
            if parsed.scheme != "file":
                raise UnsupportedRootError(raw, "not a file")
            if parsed.netloc not in ("", "localhost"):
                raise UnsupportedRootError(raw, f"remote host {parsed.netloc}")
            path = Path(url2pathname(unquote(parsed.path)))
        else:
            path = Path(spec)

        path = Path(os.path.abspath(path))

        if path.is_dir():
            return cls(path=path, kind=RootKind.DIRECTORY)
        if path.is_file():
            try:
                if zipfile.is_zipfile(path):
                    return cls(path=path, kind=RootKind.ARCHIVE)
            except OSError as e:
                raise UnsupportedRootError(raw, f"unreadable ({e})") from e
            raise UnsupportedRootError(raw, "not a directory or zip archive")
        raise UnsupportedRootError(raw, "no such file or directory")
