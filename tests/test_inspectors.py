"""
Inspectors using fixture data. No diskutil or real host required.
"""

from collections import namedtuple
from pathlib import Path

import psutil
import pytest

from mlsblk.errors import DiskListMalformed, DiskListUnavailable
from mlsblk.executor import RunResult, subprocess_executor
from mlsblk.inspectors import run_all
from mlsblk.inspectors.disks import load_disk_list, run as run_disks
from mlsblk.inspectors.info import query
from mlsblk.inspectors.mounts import run as run_mounts

FIXTURES = Path(__file__).parent / "fixtures"

_Partition = namedtuple("_Partition", "device mountpoint fstype opts")


def _failing_executor(cmd):
    return RunResult(stdout="", stderr="diskutil: command not found", returncode=127)


def _text_executor(text):
    def executor(cmd):
        return RunResult(stdout=text, stderr="", returncode=0)
    return executor


def test_load_disk_list_from_executor(fixture_executor):
    payload = load_disk_list(fixture_executor)
    assert "AllDisksAndPartitions" in payload


def test_load_disk_list_from_file():
    payload = load_disk_list(_failing_executor, FIXTURES / "diskutil_list.plist")
    assert payload["WholeDisks"] == ["disk0", "disk2", "disk3", "disk10"]


def test_disk_list_command_failure():
    with pytest.raises(DiskListUnavailable, match="diskutil list -plist"):
        load_disk_list(_failing_executor)


@pytest.mark.parametrize("text", ["", "   \n", "not a plist", "<plist><dict><key>x</key></plist>"])
def test_disk_list_unparseable(text):
    with pytest.raises(DiskListUnavailable):
        load_disk_list(_text_executor(text))


def test_disk_list_not_a_dictionary():
    text = '<?xml version="1.0" encoding="UTF-8"?><plist version="1.0"><array/></plist>'
    with pytest.raises(DiskListUnavailable, match="not a dictionary"):
        load_disk_list(_text_executor(text))


def test_disk_list_missing_file(tmp_path):
    with pytest.raises(DiskListUnavailable, match="cannot read"):
        load_disk_list(_failing_executor, tmp_path / "missing.plist")


def test_disk_list_without_top_level_array():
    text = '<?xml version="1.0" encoding="UTF-8"?><plist version="1.0"><dict><key>AllDisks</key><array/></dict></plist>'
    with pytest.raises(DiskListMalformed):
        run_disks(_text_executor(text))


def test_run_disks_indexes_every_device(fixture_executor):
    builder = run_disks(fixture_executor)
    assert len(builder.nodes) == 12
    assert {n.name: n for n in builder.nodes}["disk3s5"].label == "Macintosh HD - Data"


def test_info_query(fixture_executor):
    info = query(fixture_executor, "disk10s1")
    assert info is not None
    assert info.filesystem_type == "msdos"
    assert info.volume_uuid == "0E239BC6-F960-3107-89CF-1C97F78BB46B"
    assert info.disk_uuid is None


def test_info_query_failure(fixture_executor):
    assert query(fixture_executor, "disk99") is None


@pytest.mark.parametrize("text", [
    "garbage",
    '<?xml version="1.0" encoding="UTF-8"?><plist version="1.0"><string>x</string></plist>',
    '<?xml version="1.0" encoding="UTF-8"?><plist version="1.0"><dict><key>VolumeName</key><integer>3</integer></dict></plist>',
])
def test_info_query_unusable_output(text):
    assert query(_text_executor(text), "disk0") is None


def test_mounts_from_psutil(monkeypatch):
    parts = [
        _Partition("/dev/disk3s1s1", "/", "apfs", "ro"),
        _Partition("map auto_home", "/System/Volumes/Data/home", "autofs", "rw"),
        _Partition("", "/dev", "devfs", "rw"),
    ]
    monkeypatch.setattr(psutil, "disk_partitions", lambda all=False: parts)
    entries = run_mounts()
    assert [(e.device, e.mountpoint) for e in entries] == [
        ("/dev/disk3s1s1", "/"),
        ("map auto_home", "/System/Volumes/Data/home"),
    ]


def test_mounts_failure_is_empty(monkeypatch):
    def boom(all=False):
        raise OSError("getmntinfo failed")
    monkeypatch.setattr(psutil, "disk_partitions", boom)
    assert run_mounts() == []


def test_run_all_with_fixtures(fixture_executor, mount_entries):
    snapshot = run_all(executor=fixture_executor, mount_entries=mount_entries)
    nodes = {n.name: n for n in snapshot.walk()}
    assert [r.name for r in snapshot.blockdevices] == ["disk0", "disk2", "disk3", "disk10"]
    assert nodes["disk10s1"].mountpoint == "/Volumes/USB"
    assert nodes["disk3s5"].mountpoint == "/System/Volumes/Data"
    # Metadata is not queried without the flag
    assert nodes["disk10s1"].fstype == "DOS_FAT_32"


def test_run_all_with_metadata(fixture_executor, mount_entries):
    snapshot = run_all(executor=fixture_executor, with_metadata=True, mount_entries=mount_entries)
    nodes = {n.name: n for n in snapshot.walk()}
    assert nodes["disk10s1"].fstype == "msdos"
    assert nodes["disk10s1"].label == "USB"
    assert nodes["disk10s1"].uuid == "0E239BC6-F960-3107-89CF-1C97F78BB46B"
    assert nodes["disk0"].label == "APPLE SSD AP0512Q"
    assert nodes["disk0"].fstype == ""
    assert nodes["disk0s1"].fstype == "msdos"
    assert nodes["disk0s1"].label == "EFI"
    assert nodes["disk0s1"].uuid == "9F2C8B1A-0E4D-4B57-9A3C-6D1E2F708192"
    # No info fixture for these: list-derived values survive
    assert nodes["disk3s5"].label == "Macintosh HD - Data"
    assert nodes["disk2"].fstype == "hfs"


def test_subprocess_executor_missing_command():
    r = subprocess_executor(["mlsblk-no-such-command-xyz"])
    assert r.returncode == 127
    assert r.stdout == ""


def test_subprocess_executor_not_executable(tmp_path):
    script = tmp_path / "diskutil"
    script.write_text("#!/bin/sh\necho hi\n")
    script.chmod(0o644)
    r = subprocess_executor([str(script)])
    assert r.returncode == 126
    assert r.stdout == ""
    assert r.stderr


def test_subprocess_executor_timeout():
    r = subprocess_executor(["sleep", "5"], timeout=0.1)
    assert r.returncode == -1
    assert "timed out" in r.stderr


def test_run_all_builds_executor_with_timeout(monkeypatch, fixture_executor):
    seen = []

    def fake_make_executor(timeout=None):
        seen.append(timeout)
        return fixture_executor

    monkeypatch.setattr("mlsblk.inspectors.make_executor", fake_make_executor)
    snapshot = run_all(timeout=3.0, mount_entries=[])
    assert seen == [3.0]
    assert len(snapshot.blockdevices) == 4
