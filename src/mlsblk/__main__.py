"""
CLI entry point: parse columns, inspect, render one document to stdout.
"""

import logging
import sys
from typing import List, Optional

from .cli import parse_args, resolve_columns
from .errors import MlsblkError
from .executor import Executor
from .inspectors import run_all
from .renderers import render
from .schema import MountEntry

logger = logging.getLogger("mlsblk")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def main(
    argv: Optional[List[str]] = None,
    executor: Optional[Executor] = None,
    mount_entries: Optional[List[MountEntry]] = None,
) -> int:
    args = parse_args(argv)
    _configure_logging(args.verbose)

    try:
        columns = resolve_columns(args.output, args.fs)
        snapshot = run_all(
            executor=executor,
            plist_path=args.from_plist,
            with_metadata=args.fs,
            mount_entries=mount_entries,
            timeout=args.timeout,
        )
    except MlsblkError as e:
        print(f"mlsblk: {e}", file=sys.stderr)
        return 1

    logger.debug("Rendering %d root devices", len(snapshot.blockdevices))
    sys.stdout.write(render(snapshot, columns, json_output=args.json, list_output=args.list))
    return 0


if __name__ == "__main__":
    sys.exit(main())
