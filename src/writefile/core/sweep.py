"""Removal of staging files left behind by abandoned sessions."""

from __future__ import annotations

import os
import time
from collections.abc import Sequence

from writefile.adapters.local_storage import iter_staging_files
from writefile.core.errors import WriteFileError
from writefile.core.models import SweepPlan
from writefile.core.progress import ProgressHook, notify_progress


def sweep(
    plan: SweepPlan,
    hooks: Sequence[ProgressHook] | None = None,
    *,
    now: float | None = None,
) -> dict[str, object]:
    """Delete orphaned staging files under ``plan.root``.

    Only files older than ``plan.min_age_seconds`` are touched, so sessions
    that are still being written are left alone.
    """

    if not os.path.isdir(plan.root):
        raise WriteFileError(f"Sweep root is not a directory: {plan.root}")
    if plan.min_age_seconds < 0:
        raise WriteFileError("min_age_seconds must not be negative.")

    cutoff = (time.time() if now is None else now) - plan.min_age_seconds
    found = 0
    skipped_recent = 0
    removed: list[str] = []
    failed: list[dict[str, str]] = []

    for path in iter_staging_files(plan.root, recursive=plan.recursive):
        found += 1
        try:
            mtime = path.lstat().st_mtime
        except FileNotFoundError:
            continue
        if mtime > cutoff:
            skipped_recent += 1
            continue
        if plan.dry_run:
            removed.append(str(path))
            notify_progress(hooks, "sweep_would_remove", path=str(path))
            continue
        try:
            path.unlink()
        except FileNotFoundError:
            continue
        except OSError as exc:
            failed.append({"path": str(path), "error": str(exc)})
            notify_progress(hooks, "sweep_failed", path=str(path), error=str(exc))
            continue
        removed.append(str(path))
        notify_progress(hooks, "sweep_removed", path=str(path))

    return {
        "root": plan.root,
        "found": found,
        "removed": removed,
        "skipped_recent": skipped_recent,
        "failed": failed,
        "dry_run": plan.dry_run,
    }
