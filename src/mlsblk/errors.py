"""Fatal error types. Anything else is best-effort and never raised."""


class MlsblkError(Exception):
    """Base class for errors that abort the run with a one-line diagnostic."""


class ColumnSpecError(MlsblkError, ValueError):
    """The -o column list names no known column."""


class DiskListError(MlsblkError):
    """The disk list could not be obtained or understood."""


class DiskListUnavailable(DiskListError):
    """diskutil could not be run, failed, or produced no parseable plist."""


class DiskListMalformed(DiskListError, ValueError):
    """The plist parsed but lacks the AllDisksAndPartitions array."""
