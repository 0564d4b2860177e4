from pathlib import Path
from typing import List

import pytest

from mlsblk.executor import Executor, RunResult
from mlsblk.schema import MountEntry

FIXTURES = Path(__file__).parent / "fixtures"


def _fixture_executor(cmd):
    """Executor that returns captured diskutil output for known commands."""
    if cmd[:3] == ["diskutil", "list", "-plist"]:
        return RunResult(stdout=(FIXTURES / "diskutil_list.plist").read_text(), stderr="", returncode=0)
    if cmd[:3] == ["diskutil", "info", "-plist"]:
        path = FIXTURES / f"diskutil_info_{cmd[3]}.plist"
        if path.exists():
            return RunResult(stdout=path.read_text(), stderr="", returncode=0)
        return RunResult(stdout="", stderr=f"Could not find disk: {cmd[3]}", returncode=1)
    return RunResult(stdout="", stderr="unknown command", returncode=1)


@pytest.fixture
def fixture_executor() -> Executor:
    return _fixture_executor


@pytest.fixture
def mount_entries() -> List[MountEntry]:
    return [
        MountEntry(device="/dev/disk3s1s1", mountpoint="/"),
        MountEntry(device="/dev/disk3s5", mountpoint="/System/Volumes/Data"),
        MountEntry(device="/dev/disk10s1", mountpoint="/Volumes/USB"),
        MountEntry(device="map auto_home", mountpoint="/System/Volumes/Data/home"),
    ]
