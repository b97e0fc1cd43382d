"""Open/commit/abort protocol for atomically replacing a file.

A session writes into a private staging file next to the final path. Nothing
visible at the final path changes until :func:`commit` renames the staging
file over it; :func:`abort` throws the staging file away instead.

Typical use::

    resolved, staging = writefile.open("settings.conf")
    with staging:
        staging.write(payload)
        writefile.commit(resolved, staging)

Leaving the ``with`` block without committing aborts the session.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager
from typing import BinaryIO

from writefile.adapters.staging import open_staging
from writefile.core.errors import ReplaceIOError, SessionStateError
from writefile.core.models import SessionState
from writefile.core.progress import ProgressHook, emit_progress, notify_progress
from writefile.core.resolve import resolve_target


class StagingFile:
    """Writable staging file owned by one replacement session."""

    def __init__(
        self,
        fileobj: BinaryIO,
        name: str,
        final_path: str,
        *,
        hooks: Sequence[ProgressHook] | None = None,
    ) -> None:
        self._file = fileobj
        self.name = name
        self.final_path = final_path
        self.state: SessionState = "open"
        self._hooks = tuple(hooks or ())

    def __repr__(self) -> str:
        return f"<StagingFile name={self.name!r} final_path={self.final_path!r} state={self.state}>"

    def __enter__(self) -> StagingFile:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self.state == "open":
            abort(self)

    @property
    def closed(self) -> bool:
        return self._file.closed

    def write(self, data: bytes) -> int:
        return self._file.write(data)

    def writelines(self, lines: Iterable[bytes]) -> None:
        self._file.writelines(lines)

    def read(self, size: int = -1) -> bytes:
        return self._file.read(size)

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        return self._file.seek(offset, whence)

    def tell(self) -> int:
        return self._file.tell()

    def truncate(self, size: int | None = None) -> int:
        return self._file.truncate(size)

    def flush(self) -> None:
        self._file.flush()

    def fileno(self) -> int:
        return self._file.fileno()

    def _require_open(self, op: str) -> None:
        if self.state != "open":
            raise SessionStateError(f"cannot {op} {self.state} staging file {self.name}")


def open(target_path: str | os.PathLike[str], *, hooks: Sequence[ProgressHook] | None = None) -> tuple[str, StagingFile]:
    """Start replacing ``target_path``.

    Returns the resolved path, which should be passed to :func:`commit`, and
    the staging file. The resolved path differs from ``target_path`` when the
    target is a symlink; committing then replaces the file the link points
    at, not the link.
    """
    target = os.fspath(target_path)
    resolved = resolve_target(target)
    return resolved, _start(resolved, target, hooks)


def open_no_deref(
    target_path: str | os.PathLike[str], *, hooks: Sequence[ProgressHook] | None = None
) -> StagingFile:
    """Like :func:`open`, but ``target_path`` is used as-is and may be a symlink to overwrite."""
    target = os.fspath(target_path)
    return _start(target, target, hooks)


def _start(final_path: str, target: str, hooks: Sequence[ProgressHook] | None) -> StagingFile:
    try:
        fileobj, name = open_staging(os.path.dirname(final_path))
    except OSError as exc:
        raise ReplaceIOError("open", target, exc) from exc
    staging = StagingFile(fileobj, name, final_path, hooks=hooks)
    try:
        emit_progress(hooks, "staging_opened", target=target, resolved=final_path, staging=name)
    except BaseException:
        _discard(staging)
        raise
    return staging


def commit(resolved_path: str | os.PathLike[str], staging: StagingFile) -> None:
    """Make the staging file's content visible at ``resolved_path``.

    The data is synced to disk, the permission bits of any file already at
    ``resolved_path`` are copied over, and the staging file is renamed into
    place. On failure the staging file is removed and ``resolved_path`` is
    left untouched.
    """
    staging._require_open("commit")
    resolved = os.fspath(resolved_path)
    fileobj = staging._file

    try:
        fileobj.flush()
        os.fsync(fileobj.fileno())
    except OSError as exc:
        _fail(staging, "sync", exc)
        raise ReplaceIOError("sync", staging.name, exc) from exc

    # inherit permissions from the file being replaced; failures are ignored
    try:
        st = os.stat(resolved)
    except OSError:
        pass
    else:
        try:
            os.fchmod(fileobj.fileno(), st.st_mode & 0o777)
        except OSError:
            pass

    try:
        fileobj.close()
    except OSError as exc:
        _fail(staging, "close", exc)
        raise ReplaceIOError("close", staging.name, exc) from exc

    try:
        os.replace(staging.name, resolved)
    except OSError as exc:
        _fail(staging, "rename", exc)
        raise ReplaceIOError("rename", resolved, exc) from exc

    staging.state = "committed"
    notify_progress(staging._hooks, "committed", resolved=resolved, staging=staging.name)


def abort(staging: StagingFile) -> None:
    """Discard the staging file. Never raises; a finished session is left alone."""
    if staging.state != "open":
        return
    _discard(staging)
    notify_progress(staging._hooks, "aborted", staging=staging.name)


def _fail(staging: StagingFile, op: str, exc: OSError) -> None:
    _discard(staging)
    notify_progress(staging._hooks, "commit_failed", op=op, staging=staging.name, error=str(exc))


def _discard(staging: StagingFile) -> None:
    staging.state = "aborted"
    try:
        staging._file.close()
    except OSError:
        pass
    try:
        os.unlink(staging.name)
    except OSError:
        pass


@contextmanager
def replace(
    target_path: str | os.PathLike[str],
    *,
    deref: bool = True,
    hooks: Sequence[ProgressHook] | None = None,
) -> Iterator[StagingFile]:
    """Context manager that commits on normal exit and aborts on error.

    The body may call :func:`commit` or :func:`abort` itself; the block then
    leaves the session as it is.
    """
    if deref:
        resolved, staging = open(target_path, hooks=hooks)
    else:
        resolved = os.fspath(target_path)
        staging = open_no_deref(resolved, hooks=hooks)
    with staging:
        yield staging
        if staging.state == "open":
            commit(resolved, staging)


def write_bytes(target_path: str | os.PathLike[str], data: bytes, *, deref: bool = True) -> str:
    """Atomically replace ``target_path`` with ``data``; returns the path written."""
    with replace(target_path, deref=deref) as staging:
        staging.write(data)
    return staging.final_path


def write_text(
    target_path: str | os.PathLike[str],
    text: str,
    *,
    encoding: str = "utf-8",
    deref: bool = True,
) -> str:
    return write_bytes(target_path, text.encode(encoding), deref=deref)
