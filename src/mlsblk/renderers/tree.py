"""Tree renderer: roots flush-left, descendants drawn with box connectors."""

from typing import Iterator, List, NamedTuple, Sequence

from jinja2 import Environment

from ..schema import BlockDeviceSnapshot, Column, DeviceNode
from . import header

ROOT_INDENT = "  "
BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE = "│   "
SPACE = "    "


class TreeRow(NamedTuple):
    prefix: str
    node: DeviceNode


def tree_rows(roots: List[DeviceNode]) -> Iterator[TreeRow]:
    for root in roots:
        yield TreeRow("", root)
        yield from _child_rows(root, ROOT_INDENT)


def _child_rows(node: DeviceNode, prefix: str) -> Iterator[TreeRow]:
    last_index = len(node.children) - 1
    for i, child in enumerate(node.children):
        last = i == last_index
        yield TreeRow(prefix + (LAST_BRANCH if last else BRANCH), child)
        yield from _child_rows(child, prefix + (SPACE if last else PIPE))


def render(
    snapshot: BlockDeviceSnapshot,
    env: Environment,
    columns: Sequence[Column],
) -> str:
    # The name always leads the row; a NAME column elsewhere adds nothing.
    trailing = [c for c in columns[1:] if c != Column.NAME]
    template = env.get_template("tree.txt.j2")
    return template.render(
        header=header(columns),
        rows=list(tree_rows(snapshot.blockdevices)),
        trailing=trailing,
    )
