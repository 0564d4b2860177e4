"""Mount inspector: live mount table via psutil (getmntinfo on macOS)."""

import logging
from typing import List

import psutil

from ..schema import MountEntry

logger = logging.getLogger(__name__)


def run() -> List[MountEntry]:
    """Every mounted filesystem, including non-device ones. Empty on failure."""
    try:
        partitions = psutil.disk_partitions(all=True)
    except (OSError, psutil.Error) as e:
        logger.debug("Cannot read mount table: %s", e)
        return []
    return [
        MountEntry(device=p.device, mountpoint=p.mountpoint)
        for p in partitions
        if p.device and p.mountpoint
    ]
