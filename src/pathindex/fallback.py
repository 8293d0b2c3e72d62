"""
Unindexed enumeration across every root.

The index remembers only the winning root per name. Callers that need every
shadowed match (for example all config files of one name on the path) go
through this linear scan instead.

A root that fails to read raises ResourceReadError and ends the
enumeration, unless skip_unreadable is set, in which case the failure is
logged and the remaining roots are still asked.
"""

import logging
from typing import Callable, Iterator, List, Sequence

from pathindex.errors import ResourceReadError
from pathindex.resolver import EntryResolver, Resource

logger = logging.getLogger(__name__)


class FallbackEnumerator:
    """Query each root's resolver in registration order."""

    def __init__(self, resolvers: Callable[[], Sequence[EntryResolver]]):
        self._resolvers = resolvers

    def iter_all(self, name: str, skip_unreadable: bool = False) -> Iterator[Resource]:
        for resolver in self._resolvers():
            try:
                resource = resolver.resolve(name)
            except ResourceReadError as e:
                if not skip_unreadable:
                    raise
                logger.warning("Skipping unreadable root: %s", e)
                continue
            if resource is not None:
                yield resource

    def find_all(self, name: str, skip_unreadable: bool = False) -> List[Resource]:
        found = list(self.iter_all(name, skip_unreadable=skip_unreadable))
        logger.debug("Enumerated %s: %d matches", name, len(found))
        return found

    def locate_all(self, name: str) -> List[str]:
        locations = []
        for resolver in self._resolvers():
            location = resolver.locate(name)
            if location is not None:
                locations.append(location)
        return locations
