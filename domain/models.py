# -*- coding: utf-8 -*-

import datetime as dt
import enum
from dataclasses import dataclass
from typing import Mapping, Optional, Union


@dataclass(eq=False)
class Task:
    # identity is the object itself; duplicate titles are fine
    title: str


class Phase(enum.Enum):
    IDLE = "Idle"
    TASK_RUNNING = "TaskRunning"
    TASK_PAUSED = "TaskPaused"
    BREAK_RUNNING = "BreakRunning"
    BREAK_PAUSED = "BreakPaused"


ZERO = dt.timedelta(0)


@dataclass(frozen=True)
class Idle:
    phase = Phase.IDLE


@dataclass(frozen=True)
class TaskRunning:
    task: Task
    remaining: dt.timedelta
    phase = Phase.TASK_RUNNING


@dataclass(frozen=True)
class TaskPaused:
    task: Task
    remaining: dt.timedelta
    phase = Phase.TASK_PAUSED


@dataclass(frozen=True)
class BreakRunning:
    remaining: dt.timedelta
    phase = Phase.BREAK_RUNNING


@dataclass(frozen=True)
class BreakPaused:
    remaining: dt.timedelta
    phase = Phase.BREAK_PAUSED


TimerState = Union[Idle, TaskRunning, TaskPaused, BreakRunning, BreakPaused]

TASK_STATES = (TaskRunning, TaskPaused)
BREAK_STATES = (BreakRunning, BreakPaused)
RUNNING_STATES = (TaskRunning, BreakRunning)


def active_task(state: TimerState) -> Optional[Task]:
    if isinstance(state, TASK_STATES):
        return state.task
    return None


def remaining_of(state: TimerState) -> dt.timedelta:
    # Idle carries no duration
    return getattr(state, "remaining", ZERO)


# ---- progression snapshot ----
_EPOCH = dt.datetime(1970, 1, 1)


def timedelta_to_ticks(value: dt.timedelta) -> int:
    return (value.days * 86400 + value.seconds) * 1_000_000 + value.microseconds


def ticks_to_timedelta(ticks: int) -> dt.timedelta:
    return dt.timedelta(microseconds=ticks)


def datetime_to_ticks(value: dt.datetime) -> int:
    return timedelta_to_ticks(value - _EPOCH)


def ticks_to_datetime(ticks: int) -> dt.datetime:
    return _EPOCH + ticks_to_timedelta(ticks)


_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1


def _parse_int(raw: Optional[str]) -> int:
    try:
        value = int((raw or "").strip())
    except ValueError:
        return 0
    if not _INT64_MIN <= value <= _INT64_MAX:
        return 0
    return value


def _parse_phase(raw: Optional[str]) -> Optional[Phase]:
    try:
        return Phase((raw or "").strip())
    except ValueError:
        return None


def _parse_bool(raw: Optional[str]) -> bool:
    return (raw or "").strip().lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class ProgressionSnapshot:
    """
    Timer progress stashed across application restarts.

    Values are stored as strings in a key-value store; `from_values` never
    raises and falls back to zero / None for anything missing or malformed.
    Numbers outside the signed 64-bit range count as malformed.

    One tick is one microsecond. `duration_ticks` is the remaining time and
    `last_tick_ticks` counts from 1970-01-01 (naive local time). These are not
    .NET ticks (100 ns since year 1), so a store written by another
    implementation is not interchangeable with this one.
    """

    enabled: bool = False
    phase: Optional[Phase] = None
    task_title: str = ""
    duration_ticks: int = 0
    last_tick_ticks: int = 0

    @property
    def duration(self) -> dt.timedelta:
        try:
            return ticks_to_timedelta(max(0, self.duration_ticks))
        except OverflowError:
            return ZERO

    @property
    def last_tick(self) -> Optional[dt.datetime]:
        if self.last_tick_ticks <= 0:
            return None
        try:
            return ticks_to_datetime(self.last_tick_ticks)
        except OverflowError:
            return None

    @classmethod
    def from_values(cls, values: Mapping[str, Optional[str]]) -> "ProgressionSnapshot":
        return cls(
            enabled=_parse_bool(values.get("enable")),
            phase=_parse_phase(values.get("pomodoroState")),
            task_title=values.get("workingTask") or "",
            duration_ticks=_parse_int(values.get("duration")),
            last_tick_ticks=_parse_int(values.get("lastTick")),
        )

    def to_values(self) -> dict:
        return {
            "enable": "true" if self.enabled else "false",
            "pomodoroState": self.phase.value if self.phase else "",
            "workingTask": self.task_title,
            "duration": str(self.duration_ticks),
            "lastTick": str(self.last_tick_ticks),
        }
