from filesplit.core.store import read_all, write_all
from filesplit.errors import UsageError


def merge_files(config):
    """
    Merges files into one by concatenating them in the given order.

    The destination is truncated first. Inputs are never reordered, so the
    caller owns the sequence. On failure the destination keeps what was
    appended so far.

    Args:
        config (MergeConfig): Ordered input paths and the destination path.
    """
    if not config.files:
        raise UsageError("empty file list")

    if not config.out:
        raise UsageError("empty output file name")

    write_all(config.out, b"")

    for file_name in config.files:
        data = read_all(file_name)
        write_all(config.out, data, append=True)
