"""
Indexed search path.

Composition root that owns the ordered roots, one ResourceIndex and the
fallback enumerator.

Usage:
    search_path = SearchPath(["build/classes", "lib/deps.jar"], strict=False)
    resource = search_path.find_first("com/example/app.properties")
    every_match = search_path.find_all("META-INF/services/plugin")

    with SearchPath(["lib/deps.jar"]) as search_path:
        ...
"""
from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from pathindex import names
from pathindex.fallback import FallbackEnumerator
from pathindex.index import ResourceIndex
from pathindex.resolver import BaseResolver, Resource, resolver_for
from pathindex.roots import Root
from pathindex.scanner import scan_root

logger = logging.getLogger(__name__)

DEFAULT_ENV_VAR = "PATHINDEX_PATH"

RootSpec = Union[str, Path, Root]


class SearchPath:
    """
    Ordered search path with an indexed single-match lookup.

    Single lookups (find_first, find_location) are served from the index.
    find_all deliberately bypasses the index and asks every root, since the
    index keeps only the first match per name.
    """

    def __init__(
        self,
        roots: Iterable[RootSpec] = (),
        strict: bool = False,
        verbose: bool = False,
    ):
        self._strict = strict
        self._verbose = verbose
        self._roots: List[Root] = []
        self._resolvers: List[BaseResolver] = []
        self._index = ResourceIndex(strict=strict, verbose=verbose)
        self._fallback = FallbackEnumerator(lambda: tuple(self._resolvers))
        # Serialises scans; the index has its own lock for readers.
        self._write_lock = threading.Lock()

        for root in roots:
            self.add_root(root)

    @classmethod
    def from_path_string(cls, value: str, **kwargs) -> "SearchPath":
        """Build from an os.pathsep-delimited string, skipping empty segments."""
        return cls([p for p in value.split(os.pathsep) if p], **kwargs)

    @classmethod
    def from_environment(cls, var: str = DEFAULT_ENV_VAR, **kwargs) -> "SearchPath":
        return cls.from_path_string(os.environ.get(var, ""), **kwargs)

    @property
    def roots(self) -> Tuple[Root, ...]:
        return tuple(self._roots)

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def verbose(self) -> bool:
        return self._verbose

    @property
    def index(self) -> ResourceIndex:
        return self._index

    def _trace(self, message: str, *args) -> None:
        logger.log(logging.INFO if self._verbose else logging.DEBUG, message, *args)

    def add_root(self, spec: RootSpec) -> Optional[Root]:
        """
        Scan a root and index it after every previously added root.

        Args:
            spec: Path, file: URL or Root

        Returns:
            The added Root, or None if it was already on the search path

        Raises:
            UnsupportedRootError: root is not a directory or zip archive
            DuplicateResourceError: strict mode and the root repeats a name
        """
        root = Root.from_spec(spec)
        with self._write_lock:
            if any(existing.path == root.path for existing in self._roots):
                logger.warning("Ignoring duplicate search path root %s", root.uri)
                return None

            self._trace("Indexing %s", root.uri)
            resolver = resolver_for(root)
            added = self._index.register_all(scan_root(root), resolver)
            self._roots.append(root)
            self._resolvers.append(resolver)
            self._trace("Indexed %s (%d new names)", root.uri, added)
        return root

    def _query_name(self, name: str) -> str:
        # Names are matched as given first, so a file whose name contains a
        # backslash stays reachable on POSIX.
        if name in self._index:
            return name
        return names.normalize(name)

    def find_first(self, name: str) -> Optional[Resource]:
        """
        Resolve a name against the first root that contains it.

        Returns:
            Resource, or None if no root contains the name

        Raises:
            ResourceReadError: the owning root can no longer be read
        """
        name = self._query_name(name)
        resolver = self._index.lookup(name)
        if resolver is None:
            return None
        self._trace("Getting resource %s from %s", name, resolver.origin)
        return resolver.resolve(name)

    def find_location(self, name: str) -> Optional[str]:
        """Return the URL of the first match without reading its bytes."""
        name = self._query_name(name)
        resolver = self._index.lookup(name)
        if resolver is None:
            return None
        self._trace("Finding resource %s in %s", name, resolver.origin)
        return resolver.locate(name)

    def owner_of(self, name: str) -> Optional[Root]:
        resolver = self._index.lookup(self._query_name(name))
        return resolver.root if resolver is not None else None

    def iter_all(self, name: str, skip_unreadable: bool = False) -> Iterator[Resource]:
        """
        Lazily yield every match for a name, one per containing root.

        A root that cannot be read raises ResourceReadError and stops the
        iteration. With skip_unreadable=True that root is logged at WARNING
        and skipped instead.
        """
        name = self._query_name(name)
        self._trace("Enumerating resource %s across %d roots", name, len(self._roots))
        return self._fallback.iter_all(name, skip_unreadable=skip_unreadable)

    def find_all(self, name: str, skip_unreadable: bool = False) -> List[Resource]:
        """Every match for a name, one per containing root, in root order."""
        return list(self.iter_all(name, skip_unreadable=skip_unreadable))

    def locate_all(self, name: str) -> List[str]:
        return self._fallback.locate_all(self._query_name(name))

    def close(self) -> None:
        """Release archive handles held by the resolvers."""
        with self._write_lock:
            for resolver in self._resolvers:
                resolver.close()

    def __enter__(self) -> "SearchPath":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __contains__(self, name: str) -> bool:
        return name in self._index or names.normalize(name) in self._index

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        mode = "strict" if self._strict else "permissive"
        return f"SearchPath({len(self._roots)} roots, {len(self._index)} names, {mode})"
