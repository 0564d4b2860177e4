"""mlsblk: list block devices on macOS, lsblk style."""

__version__ = "0.1.0"
