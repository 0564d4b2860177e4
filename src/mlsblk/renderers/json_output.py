"""JSON renderer: lsblk-style {"blockdevices": [...]} with a fixed field set."""

from typing import List, Optional

from pydantic import BaseModel

from ..schema import BlockDeviceSnapshot, DeviceNode


class BlockDeviceEntry(BaseModel):
    """One device in the JSON document. children is omitted for leaves."""

    name: str
    size: int
    type: str
    mountpoint: str
    fstype: str
    label: str
    uuid: str
    children: Optional[List["BlockDeviceEntry"]] = None

    @classmethod
    def from_node(cls, node: DeviceNode) -> "BlockDeviceEntry":
        return cls(
            name=node.name,
            size=node.size,
            type=node.kind.value,
            mountpoint=node.mountpoint,
            fstype=node.fstype,
            label=node.label,
            uuid=node.uuid,
            children=[cls.from_node(c) for c in node.children] or None,
        )


BlockDeviceEntry.model_rebuild()


class BlockDevicesDocument(BaseModel):
    blockdevices: List[BlockDeviceEntry]

    @classmethod
    def from_snapshot(cls, snapshot: BlockDeviceSnapshot) -> "BlockDevicesDocument":
        return cls(blockdevices=[BlockDeviceEntry.from_node(r) for r in snapshot.blockdevices])


def render(snapshot: BlockDeviceSnapshot) -> str:
    """Columns do not apply here: every device carries every field."""
    doc = BlockDevicesDocument.from_snapshot(snapshot)
    return doc.model_dump_json(indent=2, exclude_none=True) + "\n"
