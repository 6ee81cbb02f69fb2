import os

from filesplit.errors import NotFoundError, UsageError


def _check_name(path):
    if not path:
        raise UsageError("file name is empty")


def release(f, primary=None):
    """
    Closes a file handle without losing either error.

    If the operation on the handle already failed, that error wins and a
    failing close is attached to it as a note. Otherwise a failing close is
    raised as the operation's error.
    """
    try:
        f.close()
    except OSError as e:
        if primary is None:
            raise
        primary.add_note(f"closing {f.name} also failed: {e}")


def read_all(path):
    """
    Reads a whole file into memory.

    Args:
        path (str): Path to the file.

    Returns:
        bytes: The file's full contents.
    """
    _check_name(path)
    if not os.path.exists(path):
        raise NotFoundError(f"{path} does not exist")

    f = open(path, "rb")
    try:
        data = f.read()
    except BaseException as e:
        release(f, e)
        raise
    release(f)
    return data


def write_all(path, data, append=False, exclusive=False):
    """
    Writes data into path, creating it when it does not exist.

    Args:
        path (str): Path to the file.
        data (bytes): Bytes written in a single call.
        append (bool): Append to the file instead of truncating it.
        exclusive (bool): Fail with FileExistsError if path already exists.
    """
    _check_name(path)
    if append and exclusive:
        raise UsageError("append and exclusive cannot be combined")

    if append:
        mode = "ab"
    elif exclusive:
        mode = "xb"
    else:
        mode = "wb"

    f = open(path, mode)
    try:
        f.write(data)
    except BaseException as e:
        release(f, e)
        raise
    release(f)
