from dataclasses import dataclass
from typing import Literal

SessionState = Literal["open", "committed", "aborted"]


@dataclass(frozen=True)
class SweepPlan:
    root: str
    recursive: bool = False
    min_age_seconds: float = 3600.0
    dry_run: bool = False
