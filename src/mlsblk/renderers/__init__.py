"""
Renderers turn a BlockDeviceSnapshot into the single document written to stdout.
Text renderers are Jinja templates shipped in mlsblk/templates.
"""

from typing import Optional, Sequence

from jinja2 import Environment, PackageLoader

from ..schema import BlockDeviceSnapshot, Column, DeviceNode

SIZE_UNITS = "BKMGTP"


def format_size(size: int) -> str:
    """Binary units, one decimal place: 512.0B, 1.5K, 500.3G."""
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{value:.1f}{SIZE_UNITS[unit]}"


def cell(node: DeviceNode, column: Column) -> str:
    """Text for one column of one node. Unset fields are empty strings."""
    if column == Column.NAME:
        return node.name
    if column == Column.SIZE:
        return format_size(node.size)
    if column == Column.TYPE:
        return node.kind.value
    if column == Column.MOUNTPOINT:
        return node.mountpoint
    if column == Column.FSTYPE:
        return node.fstype
    if column == Column.LABEL:
        return node.label
    if column == Column.UUID:
        return node.uuid
    return ""


def header(columns: Sequence[Column]) -> str:
    return " ".join(c.value for c in columns)


def make_env() -> Environment:
    env = Environment(loader=PackageLoader("mlsblk", "templates"), autoescape=False)
    env.globals["cell"] = cell
    return env


def render(
    snapshot: BlockDeviceSnapshot,
    columns: Sequence[Column],
    *,
    json_output: bool = False,
    list_output: bool = False,
    env: Optional[Environment] = None,
) -> str:
    """Pick the renderer: JSON wins over list, tree is the default."""
    from . import json_output as json_renderer, listing, tree

    if json_output:
        return json_renderer.render(snapshot)
    if env is None:
        env = make_env()
    if list_output:
        return listing.render(snapshot, env, columns)
    return tree.render(snapshot, env, columns)
