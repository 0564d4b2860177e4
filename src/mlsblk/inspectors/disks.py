"""Disk list inspector: diskutil list -plist (or a captured copy) -> hierarchy."""

import logging
import plistlib
from pathlib import Path
from typing import Any, Dict, Optional
from xml.parsers.expat import ExpatError

from ..errors import DiskListUnavailable
from ..executor import Executor
from ..hierarchy import HierarchyBuilder

logger = logging.getLogger(__name__)

DISKUTIL = "diskutil"
LIST_CMD = [DISKUTIL, "list", "-plist"]


def load_disk_list(executor: Executor, plist_path: Optional[Path] = None) -> Dict[str, Any]:
    """Return the parsed disk list. Raises DiskListUnavailable if there is none to parse."""
    if plist_path is not None:
        try:
            data = Path(plist_path).read_bytes()
        except OSError as e:
            raise DiskListUnavailable(f"cannot read {plist_path}: {e.strerror or e}") from e
        source = str(plist_path)
    else:
        r = executor(LIST_CMD)
        if r.returncode != 0:
            detail = r.stderr.strip() or f"exit code {r.returncode}"
            raise DiskListUnavailable(f"failed to run {' '.join(LIST_CMD)}: {detail}")
        data = r.stdout.encode("utf-8")
        source = " ".join(LIST_CMD)

    if not data.strip():
        raise DiskListUnavailable(f"{source} produced no output")
    try:
        payload = plistlib.loads(data)
    except (plistlib.InvalidFileException, ExpatError, ValueError) as e:
        raise DiskListUnavailable(f"failed to parse {source}: {e}") from e
    if not isinstance(payload, dict):
        raise DiskListUnavailable(f"failed to parse {source}: top level is not a dictionary")
    logger.debug("Loaded disk list from %s", source)
    return payload


def run(executor: Executor, plist_path: Optional[Path] = None) -> HierarchyBuilder:
    """Build the sorted forest. The builder is returned so callers can reach every node."""
    builder = HierarchyBuilder()
    builder.build(load_disk_list(executor, plist_path))
    logger.debug("Built %d devices under %d roots", len(builder.nodes), len(builder.roots))
    return builder
