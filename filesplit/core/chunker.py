import os

from filesplit.core.store import release, write_all
from filesplit.errors import NotFoundError, UsageError


def part_name(prefix, index):
    return f"{prefix}.part{index}"


def _validate(config):
    if not config.file:
        raise UsageError("file name is empty")

    size = config.chunk_size
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise UsageError("size must be positive")

    if not os.path.exists(config.file):
        raise NotFoundError(f"{config.file} does not exist")

    if os.path.isdir(config.file):
        raise UsageError(f"{config.file} is a directory, not a file")
    elif not os.path.isfile(config.file):
        raise UsageError(f"{config.file} is not a regular file")

    if not config.allow_empty and os.path.getsize(config.file) == 0:
        raise UsageError(f"{config.file} is empty")


def split_file(config):
    """
    Splits a file into sequential parts of at most config.chunk_size bytes.

    Parts are named "<prefix>.part<N>" with N starting at 1. Parts written
    before a failure are left on disk.

    Args:
        config (SplitConfig): Source file, chunk size, prefix and policies.

    Returns:
        List[str]: Ordered list of part paths.
    """
    _validate(config)
    prefix = config.prefix
    parts = []

    f = open(config.file, "rb")
    try:
        i = 1
        while True:
            chunk = f.read(config.chunk_size)
            if not chunk:
                break
            part = part_name(prefix, i)
            write_all(part, chunk, exclusive=not config.overwrite)
            parts.append(part)
            i += 1
    except BaseException as e:
        release(f, e)
        raise
    release(f)

    return parts
