from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from switch_library_indexer.application.app import IndexerApp


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="switch-library-indexer",
        description="Catalog local Switch packages and report duplicates and stale files.",
    )
    _ = parser.add_argument("folders", nargs="*", help="folders to scan (default: SCAN_FOLDERS)")
    _ = parser.add_argument("--settings", default=None, help="path to settings.ini")
    _ = parser.add_argument(
        "--clear-cache",
        action="store_true",
        help="drop cached container metadata before scanning",
    )
    _ = parser.add_argument(
        "--no-recursive",
        dest="recursive",
        action="store_false",
        default=None,
        help="only scan the top level of each folder",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    return IndexerApp.run_from_env(
        settings_file=args.settings,
        folders=args.folders,
        clear_cache=args.clear_cache,
        recursive=args.recursive,
    )


if __name__ == "__main__":
    sys.exit(main())
