"""Symlink resolution for replacement targets."""

from __future__ import annotations

import os
import stat

from writefile.core.errors import NotRegularFile, ReplaceIOError, TooManySymlinks

# Maximum number of symlinks followed before giving up.
MAX_SYMLINK_DEREF = 16


def resolve_target(target_path: str | os.PathLike[str]) -> str:
    """Return the path that must actually be replaced to update ``target_path``.

    Symlinks are followed one hop at a time with ``lstat``/``readlink``. The
    walk stops at a regular file or at a name that does not exist (a dangling
    link resolves to the name it points at, which Commit will create). Every
    error names ``target_path`` rather than the hop that failed.
    """

    target = os.fspath(target_path)
    current = target
    for _ in range(MAX_SYMLINK_DEREF):
        try:
            st = os.lstat(current)
        except FileNotFoundError:
            return current
        except OSError as exc:
            raise ReplaceIOError("lstat", target, exc) from exc

        if stat.S_ISREG(st.st_mode):
            return current

        if not stat.S_ISLNK(st.st_mode):
            raise NotRegularFile(target)

        try:
            link = os.readlink(current)
        except OSError as exc:
            raise ReplaceIOError("readlink", target, exc) from exc
        if os.path.isabs(link):
            current = link
        else:
            current = os.path.normpath(os.path.join(os.path.dirname(current), link))

    raise TooManySymlinks(target)
