"""
Inspectors gather raw facts about the host's block devices.
Each one receives the executor; run_all drives them in order and returns a snapshot.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

from ..enrich import apply_metadata, apply_mounts
from ..executor import Executor, make_executor
from ..schema import BlockDeviceSnapshot, MountEntry

from .disks import run as run_disks
from .info import make_lookup
from .mounts import run as run_mounts

logger = logging.getLogger(__name__)


def run_all(
    executor: Optional[Executor] = None,
    plist_path: Optional[Path] = None,
    with_metadata: bool = False,
    mount_entries: Optional[Iterable[MountEntry]] = None,
    timeout: Optional[float] = None,
) -> BlockDeviceSnapshot:
    """Disk list -> forest -> mounts -> [metadata]. Raises DiskListError if there is no disk list."""
    if executor is None:
        executor = make_executor(timeout)

    builder = run_disks(executor, plist_path)

    if mount_entries is None:
        mount_entries = run_mounts()
    updated = apply_mounts(builder.roots, mount_entries)
    logger.debug("Mount table matched %d devices", updated)

    if with_metadata:
        applied = apply_metadata(builder.nodes, make_lookup(executor))
        logger.debug("Metadata applied to %d of %d devices", applied, len(builder.nodes))

    return BlockDeviceSnapshot(blockdevices=builder.roots)
