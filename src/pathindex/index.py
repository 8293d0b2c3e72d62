"""
Resource index.

Maps each resource name to the resolver of the first root that contains
it, and owns the duplicate-registration policy:

- permissive (default): later roots never displace earlier ones
- strict: a later root that repeats a name raises DuplicateResourceError

All reads and writes go through one lock. A root's names are staged and
committed in one step, so readers never see a half-registered root.
"""
from __future__ import annotations

import logging
import threading
from typing import Dict, Iterable, List, Optional

from pathindex import names
from pathindex.errors import DuplicateResourceError
from pathindex.resolver import EntryResolver

logger = logging.getLogger(__name__)


class ResourceIndex:
    """Name -> resolver map with first-registered-wins semantics."""

    def __init__(self, strict: bool = False, verbose: bool = False):
        self.strict = strict
        self.verbose = verbose
        self._entries: Dict[str, EntryResolver] = {}
        self._lock = threading.Lock()

    def register(self, name: str, resolver: EntryResolver) -> int:
        """Register a single name. Returns the number of records added."""
        return self.register_all([name], resolver)

    def register_all(self, found: Iterable[str], resolver: EntryResolver) -> int:
        """
        Register every name of one root.

        Args:
            found: Resource names produced by scanning the resolver's root
            resolver: Resolver owning those names

        Returns:
            Number of index records added

        Raises:
            DuplicateResourceError: in strict mode, if a name already belongs
                to another root. Nothing from this batch is committed.
        """
        with self._lock:
            staged: Dict[str, EntryResolver] = {}
            for name in found:
                self._stage(name, resolver, staged)
            self._entries.update(staged)

        if self.verbose:
            for name in staged:
                logger.info("Registered %s -> %s", name, resolver.origin)
        return len(staged)

    def _stage(self, name: str, resolver: EntryResolver, staged: Dict[str, EntryResolver]) -> None:
        # Directories are reachable with and without trailing separators,
        # so keep stripping one separator at a time.
        while name:
            existing = self._entries.get(name)
            if existing is not None:
                if self.strict and existing is not resolver:
                    raise DuplicateResourceError(name, existing.origin, resolver.origin)
                return
            if name in staged:
                return
            staged[name] = resolver
            if not names.is_directory_name(name):
                return
            name = names.strip_separator(name)

    def lookup(self, name: str) -> Optional[EntryResolver]:
        with self._lock:
            return self._entries.get(name)

    def names(self) -> List[str]:
        with self._lock:
            return sorted(self._entries)

    def snapshot(self) -> Dict[str, EntryResolver]:
        with self._lock:
            return dict(self._entries)

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
