class FileSplitError(Exception):
    """Base class for errors raised by filesplit."""


class UsageError(FileSplitError, ValueError):
    """A required argument is missing or invalid. Raised before any I/O."""


class NotFoundError(FileSplitError, FileNotFoundError):
    """A named file does not exist at the time of access."""


class TransferError(FileSplitError):
    """A request to a storage node failed."""
