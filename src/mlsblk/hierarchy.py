"""
Hierarchy builder: diskutil list payload -> forest of DeviceNode.

Identity is resolved by device identifier only. The first record that names
an identifier creates the node; every later reference reuses that instance.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set

from pydantic import BaseModel, ValidationError

from .errors import DiskListMalformed
from .ordering import identifier_key
from .schema import DeviceKind, DeviceNode, DiskRecord, PartitionRecord, VolumeRecord

logger = logging.getLogger(__name__)

TOP_LEVEL_KEY = "AllDisksAndPartitions"
APFS_CONTAINER_TAG = "Apple_APFS_Container"
PARTITION_SCHEME_TAG = "_partition_scheme"
FSTYPE_MAX_LEN = 31


def is_whole_disk(content: Optional[str]) -> bool:
    """Partition-scheme disks and APFS containers are 'disk'; anything else is 'part'."""
    if not content:
        return False
    return PARTITION_SCHEME_TAG in content or APFS_CONTAINER_TAG in content


def content_to_fstype(content: Optional[str]) -> str:
    """Map a diskutil Content tag to a short filesystem type for display."""
    if not content:
        return ""
    if "APFS" in content or "41504653" in content:
        return "apfs"
    if "HFS" in content:
        return "hfs"
    if "EFI" in content or "C12A7328" in content:
        return "vfat"
    if PARTITION_SCHEME_TAG in content:
        return ""
    return content[:FSTYPE_MAX_LEN]


class HierarchyBuilder:
    """Builds a deduplicated, sorted forest from AllDisksAndPartitions entries."""

    def __init__(self) -> None:
        self._index: Dict[str, DeviceNode] = {}
        self._attached: Set[str] = set()
        self.roots: List[DeviceNode] = []

    @property
    def nodes(self) -> List[DeviceNode]:
        """Every node, in the order it was first seen."""
        return list(self._index.values())

    def ensure(self, name: str, size: int = 0, kind: DeviceKind = DeviceKind.PART) -> DeviceNode:
        """Return the node for name, creating it on first sight. Later size/kind are ignored."""
        node = self._index.get(name)
        if node is None:
            node = DeviceNode(name=name, size=size, kind=kind)
            self._index[name] = node
        return node

    def _attach(self, parent: Optional[DeviceNode], child: DeviceNode) -> None:
        # A node gets exactly one place in the forest: root or child, first wins.
        if child.name in self._attached or child is parent:
            return
        self._attached.add(child.name)
        if parent is None:
            self.roots.append(child)
        else:
            parent.children.append(child)

    def add_entries(self, entries: Sequence[Any], parent: Optional[DeviceNode] = None) -> None:
        """Add whole disks / APFS containers; roots when parent is None."""
        for raw in entries:
            record = _validate(DiskRecord, raw)
            if record is None:
                continue
            kind = DeviceKind.DISK if is_whole_disk(record.content) else DeviceKind.PART
            node = self.ensure(record.device_identifier, record.size, kind)
            if record.content is not None:
                node.fstype = content_to_fstype(record.content)
            self._attach(parent, node)

            for raw_part in record.partitions:
                self.add_partition(node, raw_part)
            for raw_vol in record.apfs_volumes:
                self.add_volume(node, raw_vol)

    def add_partition(self, disk: DeviceNode, raw: Any) -> Optional[DeviceNode]:
        record = _validate(PartitionRecord, raw)
        if record is None:
            return None
        node = self.ensure(record.device_identifier, record.size, DeviceKind.PART)
        node.fstype = content_to_fstype(record.content)
        self._attach(disk, node)
        return node

    def add_volume(self, container: DeviceNode, raw: Any) -> Optional[DeviceNode]:
        record = _validate(VolumeRecord, raw)
        if record is None:
            return None
        node = self.ensure(record.device_identifier, record.size, DeviceKind.PART)
        self._attach(container, node)
        if record.mount_point:
            node.mountpoint = record.mount_point
        if record.volume_name:
            node.label = record.volume_name
        if record.volume_uuid:
            node.uuid = record.volume_uuid
        node.fstype = "apfs"
        return node

    def sort(self) -> None:
        """Order every child list, then the roots, by identifier."""
        for root in self.roots:
            sort_children(root)
        self.roots.sort(key=lambda n: identifier_key(n.name))

    def build(self, payload: Any) -> List[DeviceNode]:
        if not isinstance(payload, Mapping):
            raise DiskListMalformed("disk list is not a dictionary")
        entries = payload.get(TOP_LEVEL_KEY)
        if not isinstance(entries, (list, tuple)):
            raise DiskListMalformed(f"disk list has no {TOP_LEVEL_KEY} array")
        self.add_entries(entries)
        self.sort()
        return self.roots


def sort_children(node: DeviceNode) -> None:
    node.children.sort(key=lambda n: identifier_key(n.name))
    for child in node.children:
        sort_children(child)


def build_forest(payload: Any) -> List[DeviceNode]:
    """Build and sort the forest for a parsed diskutil list payload."""
    return HierarchyBuilder().build(payload)


def _validate(model: type, raw: Any) -> Optional[BaseModel]:
    if not isinstance(raw, Mapping):
        logger.debug("Skipping non-dictionary record: %r", raw)
        return None
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        logger.debug(
            "Skipping malformed %s %r (%d validation errors)",
            model.__name__, raw.get("DeviceIdentifier"), e.error_count(),
        )
        return None
