"""
Enrichment passes over a built forest. Both mutate nodes in place and are
best-effort: a miss leaves the node exactly as the hierarchy builder made it.
"""

import logging
from typing import Callable, Iterable, List, Optional

from .schema import DeviceInfo, DeviceNode, MountEntry

logger = logging.getLogger(__name__)

DEVICE_DIR = "/dev/"


def apply_mounts(roots: List[DeviceNode], mounts: Iterable[MountEntry]) -> int:
    """Overlay mount-table entries onto matching nodes. Returns the number of updates."""
    updated = 0
    for entry in mounts:
        if not entry.device.startswith(DEVICE_DIR):
            continue
        name = entry.device[len(DEVICE_DIR):]
        hits = 0
        for root in roots:
            hits += _set_mountpoint(root, name, entry.mountpoint)
        if not hits:
            logger.debug("No device %s for mount %s", name, entry.mountpoint)
        updated += hits
    return updated


def _set_mountpoint(node: DeviceNode, name: str, mountpoint: str) -> int:
    hits = 0
    if node.name == name:
        node.mountpoint = mountpoint
        hits += 1
    for child in node.children:
        hits += _set_mountpoint(child, name, mountpoint)
    return hits


def apply_device_info(node: DeviceNode, info: Optional[DeviceInfo]) -> bool:
    """Overlay diskutil info facts onto one node. Returns False if there was nothing to apply."""
    if info is None:
        return False
    if info.filesystem_type is not None:
        node.fstype = info.filesystem_type
    if info.volume_name:
        node.label = info.volume_name
    elif not node.label and info.media_name:
        node.label = info.media_name
    uuid = info.volume_uuid if info.volume_uuid is not None else info.disk_uuid
    if uuid is not None:
        node.uuid = uuid
    if info.mount_point:
        node.mountpoint = info.mount_point
    return True


def apply_metadata(
    nodes: Iterable[DeviceNode],
    lookup: Callable[[str], Optional[DeviceInfo]],
) -> int:
    """Query lookup once per node and overlay whatever it returns."""
    applied = 0
    for node in nodes:
        if apply_device_info(node, lookup(node.name)):
            applied += 1
        else:
            logger.debug("No metadata for %s", node.name)
    return applied
