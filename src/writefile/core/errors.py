import errno as _errno
import os


class WriteFileError(Exception):
    """Base exception for writefile."""


class PathError(WriteFileError):
    """An operation on a path failed.

    ``path`` is always the path the caller asked for, never an intermediate
    symlink hop.
    """

    def __init__(self, op: str, path: str, cause: object) -> None:
        self.op = op
        self.path = path
        self.cause = cause
        super().__init__(f"{op} {path}: {cause}")


class NotRegularFile(PathError):
    def __init__(self, path: str) -> None:
        super().__init__("open", path, "not a regular file")


class TooManySymlinks(PathError):
    errno = _errno.ELOOP

    def __init__(self, path: str) -> None:
        super().__init__("open", path, os.strerror(_errno.ELOOP))


class ReplaceIOError(PathError):
    def __init__(self, op: str, path: str, cause: OSError) -> None:
        super().__init__(op, path, cause.strerror or cause)
        self.errno = cause.errno


class SessionStateError(WriteFileError, ValueError):
    pass
