"""Progress notifications for replacement sessions and sweeps."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Callable


ProgressHook = Callable[[str, dict[str, object]], None]


def emit_progress(hooks: Sequence[ProgressHook] | None, event: str, **payload: object) -> None:
    """Call every hook with ``event`` and a copy of ``payload``.

    Hook exceptions propagate to the caller, which must leave no staging
    file behind when that happens.
    """

    for hook in hooks or ():
        hook(event, dict(payload))


def notify_progress(hooks: Sequence[ProgressHook] | None, event: str, **payload: object) -> None:
    """Report an event whose outcome is already settled on disk.

    A failing hook is skipped so that it cannot turn a finished commit,
    abort or removal into an error.
    """

    for hook in hooks or ():
        try:
            hook(event, dict(payload))
        except Exception:
            continue
