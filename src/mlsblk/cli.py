"""Command-line parsing and column selection."""

import argparse
from pathlib import Path
from typing import List, Optional

from .errors import ColumnSpecError
from .schema import Column

DEFAULT_COLUMNS = "NAME,SIZE,TYPE,MOUNTPOINT"
METADATA_COLUMNS = "NAME,SIZE,TYPE,FSTYPE,MOUNTPOINT,LABEL,UUID"


def parse_columns(text: str) -> List[Column]:
    """Comma-separated, case-insensitive column names. Unknown names are dropped."""
    columns = []
    for token in text.split(","):
        name = token.strip().upper()
        if name in Column.__members__:
            columns.append(Column[name])
    return columns


def resolve_columns(output: Optional[str], with_metadata: bool = False) -> List[Column]:
    """Columns for this run. Raises ColumnSpecError if -o names no known column."""
    if output:
        columns = parse_columns(output)
        if not columns:
            raise ColumnSpecError("invalid -o columns")
        return columns
    return parse_columns(METADATA_COLUMNS if with_metadata else DEFAULT_COLUMNS)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="mlsblk",
        description="List block devices (lsblk for macOS, backed by diskutil).",
    )
    parser.add_argument(
        "-f", "--fs",
        action="store_true",
        help="Include FSTYPE, LABEL and UUID (queries diskutil info per device)",
    )
    parser.add_argument(
        "-o", "--output",
        metavar="COLS",
        default=None,
        help="Output columns, comma-separated (e.g. NAME,SIZE,FSTYPE,MOUNTPOINT)",
    )
    parser.add_argument(
        "-J", "--json",
        action="store_true",
        help="JSON output (takes precedence over --list)",
    )
    parser.add_argument(
        "-l", "--list",
        action="store_true",
        help="List format instead of tree",
    )
    parser.add_argument(
        "--from-plist",
        type=Path,
        default=None,
        metavar="FILE",
        help="Read a saved 'diskutil list -plist' document instead of running diskutil",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Give up on a diskutil command after SECONDS (default: wait for it)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Debug logging on stderr",
    )
    return parser.parse_args(argv)
