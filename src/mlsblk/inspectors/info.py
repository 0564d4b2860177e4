"""Device info inspector: diskutil info -plist <identifier>, one device at a time."""

import logging
import plistlib
from typing import Callable, Optional
from xml.parsers.expat import ExpatError

from pydantic import ValidationError

from ..executor import Executor
from ..schema import DeviceInfo
from .disks import DISKUTIL

logger = logging.getLogger(__name__)


def query(executor: Executor, name: str) -> Optional[DeviceInfo]:
    """Return facts for one device, or None when diskutil has nothing usable."""
    r = executor([DISKUTIL, "info", "-plist", name])
    if r.returncode != 0 or not r.stdout.strip():
        logger.debug("diskutil info %s failed: %s", name, r.stderr.strip())
        return None
    try:
        data = plistlib.loads(r.stdout.encode("utf-8"))
    except (plistlib.InvalidFileException, ExpatError, ValueError) as e:
        logger.debug("Unparseable diskutil info for %s: %s", name, e)
        return None
    if not isinstance(data, dict):
        return None
    try:
        return DeviceInfo.model_validate(data)
    except ValidationError as e:
        logger.debug("Unusable diskutil info for %s: %s", name, e)
        return None


def make_lookup(executor: Executor) -> Callable[[str], Optional[DeviceInfo]]:
    def lookup(name: str) -> Optional[DeviceInfo]:
        return query(executor, name)
    return lookup
