"""Flat list renderer: header row, then one row per device in depth-first order."""

from typing import Sequence

from jinja2 import Environment

from ..schema import BlockDeviceSnapshot, Column
from . import header


def render(
    snapshot: BlockDeviceSnapshot,
    env: Environment,
    columns: Sequence[Column],
) -> str:
    template = env.get_template("list.txt.j2")
    return template.render(
        header=header(columns),
        nodes=list(snapshot.walk()),
        columns=list(columns),
    )
