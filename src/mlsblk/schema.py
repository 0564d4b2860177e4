"""
Block device schema.

Strongly typed contract between inspectors, the hierarchy builder and the
renderers. Raw diskutil records are validated into the *Record models; the
forest itself is made of DeviceNode instances.
"""

import math
from enum import Enum
from typing import Any, Iterator, List, Optional

from pydantic import BaseModel, Field, field_validator


class DeviceKind(str, Enum):
    DISK = "disk"
    PART = "part"


class Column(str, Enum):
    """Output columns, in their canonical order."""

    NAME = "NAME"
    SIZE = "SIZE"
    TYPE = "TYPE"
    MOUNTPOINT = "MOUNTPOINT"
    FSTYPE = "FSTYPE"
    LABEL = "LABEL"
    UUID = "UUID"


# --- Forest ---


class DeviceNode(BaseModel):
    """A whole disk, partition, APFS container or APFS volume."""

    name: str
    size: int = Field(default=0, ge=0)
    kind: DeviceKind = DeviceKind.DISK
    mountpoint: str = ""
    fstype: str = ""
    label: str = ""
    uuid: str = ""
    children: List["DeviceNode"] = Field(default_factory=list)

    def walk(self) -> Iterator["DeviceNode"]:
        """Depth-first, pre-order: this node, then each child subtree."""
        yield self
        for child in self.children:
            yield from child.walk()


DeviceNode.model_rebuild()


class BlockDeviceSnapshot(BaseModel):
    """Sorted forest roots, ready for rendering."""

    blockdevices: List[DeviceNode] = Field(default_factory=list)

    model_config = {"extra": "forbid"}

    def walk(self) -> Iterator[DeviceNode]:
        for root in self.blockdevices:
            yield from root.walk()


# --- diskutil list -plist ---


def _plist_size(value: Any) -> int:
    # diskutil sizes are integers; anything else counts as unknown.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    if value < 0:
        return 0
    return int(value)


def _plist_text(value: Any, default: Optional[str]) -> Optional[str]:
    return value if isinstance(value, str) else default


class PartitionRecord(BaseModel):
    """Entry of a disk's Partitions array. Only the identifier is mandatory."""

    device_identifier: str = Field(alias="DeviceIdentifier", min_length=1)
    size: int = Field(default=0, ge=0, alias="Size")
    content: Optional[str] = Field(default=None, alias="Content")

    model_config = {"extra": "ignore", "populate_by_name": True}

    @field_validator("size", mode="before")
    @classmethod
    def coerce_size(cls, value: Any) -> int:
        return _plist_size(value)

    @field_validator("content", mode="before")
    @classmethod
    def coerce_content(cls, value: Any) -> Optional[str]:
        return _plist_text(value, None)


class VolumeRecord(BaseModel):
    """Entry of an APFS container's APFSVolumes array. Only the identifier is mandatory."""

    device_identifier: str = Field(alias="DeviceIdentifier", min_length=1)
    size: int = Field(default=0, ge=0, alias="Size")
    mount_point: str = Field(default="", alias="MountPoint")
    volume_name: str = Field(default="", alias="VolumeName")
    volume_uuid: str = Field(default="", alias="VolumeUUID")

    model_config = {"extra": "ignore", "populate_by_name": True}

    @field_validator("size", mode="before")
    @classmethod
    def coerce_size(cls, value: Any) -> int:
        return _plist_size(value)

    @field_validator("mount_point", "volume_name", "volume_uuid", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str:
        return _plist_text(value, "")


class DiskRecord(PartitionRecord):
    """Entry of AllDisksAndPartitions: a whole disk or an APFS container."""

    partitions: List[Any] = Field(default_factory=list, alias="Partitions")
    apfs_volumes: List[Any] = Field(default_factory=list, alias="APFSVolumes")

    @field_validator("partitions", "apfs_volumes", mode="before")
    @classmethod
    def coerce_sequences(cls, value: Any) -> Any:
        # A non-array value is treated as if the key were absent.
        if not isinstance(value, (list, tuple)):
            return []
        return value


# --- diskutil info -plist ---


class DeviceInfo(BaseModel):
    """Per-device facts from diskutil info. Absent keys stay None."""

    filesystem_type: Optional[str] = Field(default=None, alias="FilesystemType")
    volume_name: Optional[str] = Field(default=None, alias="VolumeName")
    media_name: Optional[str] = Field(default=None, alias="MediaName")
    volume_uuid: Optional[str] = Field(default=None, alias="VolumeUUID")
    disk_uuid: Optional[str] = Field(default=None, alias="DiskUUID")
    mount_point: Optional[str] = Field(default=None, alias="MountPoint")

    model_config = {"extra": "ignore", "populate_by_name": True}


# --- Mount table ---


class MountEntry(BaseModel):
    """One mounted filesystem: device path (e.g. /dev/disk3s1) and mount path."""

    device: str
    mountpoint: str
