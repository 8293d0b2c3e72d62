"""
Entry Resolvers
===============
Per-root resolvers that fetch resource bytes on demand.

Each resolver owns exactly one Root and:
- Resolves a resource name to its bytes and origin
- Locates a resource name as a URL without reading it
- Reports absence as None, never as an exception
- Releases any held handle on close()

Architecture:
- Resource: Result dataclass with bytes, origin and location
- EntryResolver: Protocol used by the index and the fallback enumerator
- BaseResolver: Common root bookkeeping
- DirectoryResolver / ArchiveResolver: One per RootKind
"""
from __future__ import annotations

import logging
import os
import threading
import zipfile
import zlib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Protocol
from urllib.parse import quote

from pathindex import names
from pathindex.errors import ResourceReadError
from pathindex.roots import Root, RootKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resource:
    """
    A resolved resource.

    Attributes:
        name: Resource name that was requested
        data: Resource bytes (empty for directories)
        origin: URI of the root that provided the resource
        location: URL of the resource itself inside that root
        is_directory: True if the name denotes a directory entry
    """
    name: str
    data: bytes
    origin: str
    location: str
    is_directory: bool = False

    def text(self, encoding: str = "utf-8") -> str:
        return self.data.decode(encoding)


class EntryResolver(Protocol):
    """Protocol for per-root resolvers."""

    @property
    def root(self) -> Root:
        """The single root this resolver reads from."""
        ...

    @property
    def origin(self) -> str:
        """Origin descriptor of the root."""
        ...

    def resolve(self, name: str) -> Optional[Resource]:
        """Read a resource, or return None if the root does not contain it."""
        ...

    def locate(self, name: str) -> Optional[str]:
        """Return the resource URL, or None if the root does not contain it."""
        ...


class BaseResolver(ABC):
    """Base class for resolvers with common root bookkeeping."""

    def __init__(self, root: Root):
        self._root = root

    @property
    def root(self) -> Root:
        return self._root

    @property
    def origin(self) -> str:
        return self._root.uri

    def _location(self, name: str, joiner: str) -> str:
        return f"{self.origin.rstrip('/')}{joiner}{quote(name)}"

    @abstractmethod
    def resolve(self, name: str) -> Optional[Resource]:
        pass

    @abstractmethod
    def locate(self, name: str) -> Optional[str]:
        pass

    def close(self) -> None:
        """Release any handle held on the root."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.origin})"


class DirectoryResolver(BaseResolver):
    """
    Resolver for directory roots.

    Resolution: name -> <root prefix><name>, read directly from disk.
    """

    def _path_for(self, name: str) -> Optional[str]:
        if not name:
            return None
        prefix = self.root.prefix
        path = prefix + name.replace(names.SEPARATOR, os.sep)
        if ".." in name:
            # Refuse names that climb out of the root.
            base = os.path.join(os.path.realpath(prefix), "")
            if not os.path.realpath(path).startswith(base):
                return None
        return path

    def resolve(self, name: str) -> Optional[Resource]:
        path = self._path_for(name)
        if path is None:
            return None
        try:
            if os.path.isdir(path):
                data, is_directory = b"", True
            else:
                with open(path, "rb") as f:
                    data, is_directory = f.read(), False
        except (FileNotFoundError, NotADirectoryError):
            logger.debug("%s vanished from %s after indexing", name, self.origin)
            return None
        except OSError as e:
            raise ResourceReadError(name, self.origin, e) from e

        return Resource(
            name=name,
            data=data,
            origin=self.origin,
            location=self._location(name, "/"),
            is_directory=is_directory,
        )

    def locate(self, name: str) -> Optional[str]:
        path = self._path_for(name)
        if path is None or not os.path.exists(path):
            return None
        return self._location(name, "/")


class ArchiveResolver(BaseResolver):
    """
    Resolver for zip archive roots.

    Resolution: name -> archive entry, extracted on demand. The archive is
    opened on the first lookup and the handle, with its parsed central
    directory, is reused until close(). A read failure drops the handle so
    the next call reopens the archive.
    """

    def __init__(self, root: Root):
        super().__init__(root)
        self._archive: Optional[zipfile.ZipFile] = None
        # ZipFile reads seek a shared file object; one reader at a time.
        self._lock = threading.Lock()

    def _open(self) -> zipfile.ZipFile:
        if self._archive is None:
            self._archive = zipfile.ZipFile(self.root.path)
            logger.debug("Opened archive %s", self.origin)
        return self._archive

    def _drop(self) -> None:
        if self._archive is not None:
            archive, self._archive = self._archive, None
            archive.close()

    @staticmethod
    def _entry(archive: zipfile.ZipFile, name: str) -> Optional[zipfile.ZipInfo]:
        try:
            return archive.getinfo(name)
        except KeyError:
            pass
        # "bar" also finds the "bar/" directory entry
        if name and not names.is_directory_name(name):
            try:
                return archive.getinfo(name + names.SEPARATOR)
            except KeyError:
                pass
        return None

    def resolve(self, name: str) -> Optional[Resource]:
        if not name:
            return None
        with self._lock:
            try:
                archive = self._open()
                info = self._entry(archive, name)
                if info is None:
                    return None
                data = b"" if info.is_dir() else archive.read(info)
            except (OSError, zipfile.BadZipFile, zlib.error, NotImplementedError) as e:
                self._drop()
                raise ResourceReadError(name, self.origin, e) from e

        return Resource(
            name=name,
            data=data,
            origin=self.origin,
            location=self._location(name, "!/"),
            is_directory=info.is_dir(),
        )

    def locate(self, name: str) -> Optional[str]:
        if not name:
            return None
        with self._lock:
            try:
                if self._entry(self._open(), name) is None:
                    return None
            except (OSError, zipfile.BadZipFile) as e:
                self._drop()
                raise ResourceReadError(name, self.origin, e) from e
        return self._location(name, "!/")

    def close(self) -> None:
        """Release the archive handle; a later lookup reopens it."""
        with self._lock:
            self._drop()


def resolver_for(root: Root) -> BaseResolver:
    """Build the resolver matching the root's kind."""
    if root.kind is RootKind.ARCHIVE:
        return ArchiveResolver(root)
    return DirectoryResolver(root)
