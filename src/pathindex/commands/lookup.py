"""
Lookup CLI Command
==================
Provides CLI interface for querying an indexed search path.

Commands:
- find: Resolve a resource name (first match, or every match with --all)
- index: Dump the index (name -> owning root)
- roots: List the search path roots in order

Usage:
    pathindex --path build/classes:lib/deps.jar find app.properties
    pathindex find META-INF/services/plugin --all --format json
    pathindex index --format yaml
"""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, List

import yaml

from pathindex.errors import PathIndexError
from pathindex.resolver import Resource
from pathindex.search_path import SearchPath


def _resource_dict(resource: Resource, content: bool) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "name": resource.name,
        "origin": resource.origin,
        "location": resource.location,
        "directory": resource.is_directory,
        "size": len(resource.data),
    }
    if content:
        out["content"] = resource.data.decode("utf-8", errors="replace")
    return out


class LookupCommand:
    """
    CLI command handler for search path queries.

    Each method prints its result and returns a process exit code.
    """

    def __init__(self, search_path: SearchPath):
        self.search_path = search_path

    def find(
        self,
        name: str,
        all: bool = False,
        format: str = "text",
        content: bool = False,
    ) -> int:
        """
        Resolve a resource name.

        Args:
            name: Resource name to resolve
            all: Report every root containing the name, not just the first
            format: Output format - "text" or "json"
            content: Include decoded resource content in the output

        Returns:
            Exit code (0 if found, 1 if not or on read failure)
        """
        try:
            if all:
                matches = self.search_path.find_all(name)
            else:
                first = self.search_path.find_first(name)
                matches = [first] if first is not None else []
        except PathIndexError as e:
            print(f"Error resolving {name}: {e}", file=sys.stderr)
            return 1

        if format == "json":
            output = {
                "name": name,
                "found": bool(matches),
                "matches": [_resource_dict(m, content) for m in matches],
            }
            print(json.dumps(output, indent=2))
        elif matches:
            for match in matches:
                print(f"{match.name}: {match.location}")
                if content and not match.is_directory:
                    print(match.data.decode("utf-8", errors="replace"))
        else:
            print(f"{name}: not found", file=sys.stderr)

        return 0 if matches else 1

    def inventory(self, format: str = "yaml") -> int:
        """Print every indexed name with its owning root."""
        snapshot = self.search_path.index.snapshot()
        data = {
            "strict": self.search_path.strict,
            "roots": self._roots_list(),
            "resources": {name: snapshot[name].origin for name in sorted(snapshot)},
        }

        if format == "json":
            print(json.dumps(data, indent=2))
        else:
            print(yaml.dump(data, default_flow_style=False, sort_keys=False))
        return 0

    def roots(self, format: str = "text") -> int:
        """Print the roots in search order."""
        roots = self._roots_list()
        if format == "json":
            print(json.dumps(roots, indent=2))
        else:
            for position, root in enumerate(roots, 1):
                print(f"{position:3d}. [{root['kind']}] {root['uri']}")
        return 0

    def _roots_list(self) -> List[Dict[str, str]]:
        return [
            {"uri": root.uri, "kind": root.kind.value}
            for root in self.search_path.roots
        ]
