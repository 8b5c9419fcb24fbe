# -*- coding: utf-8 -*-

import datetime as dt
from dataclasses import dataclass
from typing import Optional

from core.config import PomodoroConfig
from core.timer_engine import EngineSnapshot
from domain.models import Phase

GREEN = "#10B981"
MAGENTA = "#D946EF"

# ttk progress-bar style per bar color
PROGRESS_STYLES = {
    GREEN: "Running.Horizontal.TProgressbar",
    MAGENTA: "Paused.Horizontal.TProgressbar",
}


def format_time(remaining: dt.timedelta) -> str:
    total = max(0, int(remaining.total_seconds()))
    m = total // 60
    s = total % 60
    return f"{m:02d}:{s:02d}"


@dataclass(frozen=True)
class ProgressView:
    label: str
    fraction: float  # elapsed / total, 0.0 .. 1.0
    color: str

    @property
    def style(self) -> str:
        return PROGRESS_STYLES[self.color]


def describe_progress(
    snap: EngineSnapshot, config: PomodoroConfig
) -> Optional[ProgressView]:
    """What the progress bar shows for a snapshot; None when idle."""
    if snap.phase is Phase.IDLE:
        return None

    is_task = snap.phase in (Phase.TASK_RUNNING, Phase.TASK_PAUSED)
    total = config.task_length if is_task else config.break_length
    head = snap.task_title if is_task else "BREAK TIME"

    label = f"{head} / {format_time(snap.remaining)}"
    if not snap.is_running:
        label = f"[PAUSED] {label}"

    elapsed = total - snap.remaining
    fraction = elapsed / total if total else 1.0
    fraction = min(1.0, max(0.0, fraction))

    return ProgressView(
        label=label,
        fraction=fraction,
        color=GREEN if snap.is_running else MAGENTA,
    )
