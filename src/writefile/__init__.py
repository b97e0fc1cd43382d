"""Atomic, symlink-aware file replacement.

New content is written to a staging file in the same directory as the final
file and renamed into place on commit, so readers only ever see the old or
the new content. Symlinks are dereferenced and the replaced file's
permission bits are kept.
"""

from writefile.core.errors import (
    NotRegularFile,
    PathError,
    ReplaceIOError,
    SessionStateError,
    TooManySymlinks,
    WriteFileError,
)
from writefile.core.resolve import MAX_SYMLINK_DEREF, resolve_target
from writefile.core.session import (
    StagingFile,
    abort,
    commit,
    open,
    open_no_deref,
    replace,
    write_bytes,
    write_text,
)

__version__ = "0.1.0"

__all__ = [
    "MAX_SYMLINK_DEREF",
    "NotRegularFile",
    "PathError",
    "ReplaceIOError",
    "SessionStateError",
    "StagingFile",
    "TooManySymlinks",
    "WriteFileError",
    "abort",
    "commit",
    "open",
    "open_no_deref",
    "replace",
    "resolve_target",
    "write_bytes",
    "write_text",
]
