#!/usr/bin/env python3
"""
pathindex - command-line interface for indexed search paths.

Builds a search path from .pathindex.yaml, the environment and flags, then:
- find: Resolve a resource name against the index (or every root with --all)
- index: Dump the name -> root index
- roots: List the roots in search order

Usage:
    pathindex --path build/classes:lib/deps.jar find app.properties
    pathindex find META-INF/services/plugin --all
    pathindex --strict index --format json
    pathindex roots
    pathindex --help
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pathindex.commands.lookup import LookupCommand
from pathindex.config import SearchPathConfig
from pathindex.errors import PathIndexError


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="[%(name)s] %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pathindex",
        description="Indexed resource lookup across directories and zip archives",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --path a:b.jar find foo.txt          First root containing foo.txt
  %(prog)s find foo.txt --all                   Every root containing foo.txt
  %(prog)s find foo.txt --content               Print the resource content
  %(prog)s --strict index                       Fail on shadowed names
  %(prog)s index --format json                  Dump the index as JSON
  %(prog)s roots                                List roots in search order

Roots are taken from .pathindex.yaml (searched upward from the current
directory), then $PATHINDEX_PATH, then --path.
        """
    )
    parser.add_argument(
        "--path",
        type=str,
        help="Extra roots, separated by the OS path separator"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Config file (default: nearest .pathindex.yaml)"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Fail when a later root repeats a resource name"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        default=None,
        help="Trace every index operation"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # ----- pathindex find <name> -----
    find_parser = subparsers.add_parser(
        "find",
        help="Resolve a resource name",
        description="Resolve a resource name against the search path"
    )
    find_parser.add_argument("name", type=str, help="Resource name, e.g. pkg/data.txt")
    find_parser.add_argument(
        "--all",
        action="store_true",
        help="Report every root containing the name (unindexed scan)"
    )
    find_parser.add_argument(
        "--format",
        type=str,
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)"
    )
    find_parser.add_argument(
        "--content",
        action="store_true",
        help="Include resource content"
    )

    # ----- pathindex index -----
    index_parser = subparsers.add_parser(
        "index",
        help="Dump the resource index",
        description="Print every indexed name with the root that owns it"
    )
    index_parser.add_argument(
        "--format",
        type=str,
        choices=["yaml", "json"],
        default="yaml",
        help="Output format (default: yaml)"
    )

    # ----- pathindex roots -----
    roots_parser = subparsers.add_parser(
        "roots",
        help="List search path roots",
        description="List the roots in search order"
    )
    roots_parser.add_argument(
        "--format",
        type=str,
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    try:
        config = SearchPathConfig.load(config_path=args.config)
        if args.path:
            config.roots.extend(SearchPathConfig.split_path(args.path))
        if args.strict is not None:
            config.strict = args.strict
        if args.verbose is not None:
            config.verbose = args.verbose

        _configure_logging(config.verbose)
        search_path = config.build_search_path()
    except PathIndexError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    with search_path:
        cmd = LookupCommand(search_path)

        if args.command == "find":
            return cmd.find(
                name=args.name,
                all=args.all,
                format=args.format,
                content=args.content,
            )
        elif args.command == "index":
            return cmd.inventory(format=args.format)
        elif args.command == "roots":
            return cmd.roots(format=args.format)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
