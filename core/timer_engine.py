# -*- coding: utf-8 -*-

import datetime as dt
from dataclasses import dataclass
from typing import Optional

from core.config import PomodoroConfig
from core.log import get_logger
from core.task_queue import TaskQueue
from domain.models import (
    BREAK_STATES,
    RUNNING_STATES,
    TASK_STATES,
    ZERO,
    BreakPaused,
    BreakRunning,
    Idle,
    Phase,
    ProgressionSnapshot,
    Task,
    TaskPaused,
    TaskRunning,
    TimerState,
    active_task,
    datetime_to_ticks,
    remaining_of,
    timedelta_to_ticks,
)

log = get_logger(__name__)


def decay(
    remaining: dt.timedelta, now: dt.datetime, previous: dt.datetime
) -> dt.timedelta:
    """Subtract the wall-clock time between two ticks, never going below zero."""
    left = remaining - (now - previous)
    return left if left > ZERO else ZERO


@dataclass
class EngineSnapshot:
    phase: Phase
    remaining: dt.timedelta
    task_title: Optional[str]
    is_running: bool


class TimerEngine:
    """
    Pure Pomodoro state machine (no Tkinter).

    The UI calls tick(now) once per repaint. Transitions return True when the
    state changed and False when their guard did not hold.
    """

    def __init__(self, pending: TaskQueue, config: Optional[PomodoroConfig] = None):
        self.pending = pending
        self.config = config or PomodoroConfig()

        self.state: TimerState = Idle()
        self.last_tick: Optional[dt.datetime] = None

    # ---- read side ----
    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def active_task(self) -> Optional[Task]:
        return active_task(self.state)

    @property
    def remaining(self) -> dt.timedelta:
        return remaining_of(self.state)

    @property
    def is_expired(self) -> bool:
        return isinstance(self.state, RUNNING_STATES) and self.state.remaining <= ZERO

    def snapshot(self) -> EngineSnapshot:
        task = self.active_task
        return EngineSnapshot(
            phase=self.phase,
            remaining=self.remaining,
            task_title=task.title if task else None,
            is_running=isinstance(self.state, RUNNING_STATES),
        )

    def _set(self, new: TimerState) -> bool:
        old = self.state
        self.state = new
        log.info("timer_transition", old=old.phase.value, new=new.phase.value)
        return True

    # ---- task transitions ----
    def start_task(self) -> bool:
        if isinstance(self.state, TASK_STATES):
            return False
        task = self.pending.pop_front()
        if task is None:
            return False
        return self._set(TaskRunning(task, self.config.task_length))

    def pause_task(self) -> bool:
        s = self.state
        if not isinstance(s, TaskRunning):
            return False
        return self._set(TaskPaused(s.task, s.remaining))

    def resume_task(self) -> bool:
        s = self.state
        if not isinstance(s, TaskPaused):
            return False
        return self._set(TaskRunning(s.task, s.remaining))

    def restart_task(self) -> bool:
        s = self.state
        if not isinstance(s, TASK_STATES):
            return False
        return self._set(TaskRunning(s.task, self.config.task_length))

    def stop_task(self) -> bool:
        if not isinstance(self.state, TASK_STATES):
            return False
        return self._set(Idle())

    # ---- break transitions ----
    def start_break(self) -> bool:
        if isinstance(self.state, BREAK_STATES):
            return False
        return self._set(BreakRunning(self.config.break_length))

    def pause_break(self) -> bool:
        s = self.state
        if not isinstance(s, BreakRunning):
            return False
        return self._set(BreakPaused(s.remaining))

    def resume_break(self) -> bool:
        s = self.state
        if not isinstance(s, BreakPaused):
            return False
        return self._set(BreakRunning(s.remaining))

    def restart_break(self) -> bool:
        if not isinstance(self.state, BREAK_STATES):
            return False
        return self._set(BreakRunning(self.config.break_length))

    def stop_break(self) -> bool:
        if not isinstance(self.state, BREAK_STATES):
            return False
        return self._set(Idle())

    # ---- clock ----
    def tick(self, now: dt.datetime) -> dt.timedelta:
        """
        Record `now` as the latest repaint and charge the elapsed time to a
        running phase. Paused phases only move the timestamp forward.
        """
        previous, self.last_tick = self.last_tick, now
        s = self.state
        if previous is None or not isinstance(s, RUNNING_STATES):
            return self.remaining

        left = decay(s.remaining, now, previous)
        if isinstance(s, TaskRunning):
            self.state = TaskRunning(s.task, left)
        else:
            self.state = BreakRunning(left)
        return left

    # ---- completion ----
    def complete_task(self, finished: bool) -> bool:
        s = self.state
        if not isinstance(s, TaskRunning):
            return False
        if not finished:
            self.pending.push_front(s.task)
        log.info("task_completed", title=s.task.title, finished=finished)
        return self.start_break()

    def complete_break(self, next_task: bool) -> bool:
        if not isinstance(self.state, BreakRunning):
            return False
        log.info("break_completed", next_task=next_task)
        if next_task and self.start_task():
            return True
        return self.stop_break()

    # ---- progression ----
    def to_progression(self) -> ProgressionSnapshot:
        task = self.active_task
        return ProgressionSnapshot(
            enabled=True,
            phase=self.phase,
            task_title=task.title if task else "",
            duration_ticks=timedelta_to_ticks(self.remaining),
            last_tick_ticks=datetime_to_ticks(self.last_tick) if self.last_tick else 0,
        )

    def restore(self, snap: ProgressionSnapshot) -> None:
        remaining = snap.duration
        title = snap.task_title

        if snap.phase in (Phase.TASK_RUNNING, Phase.TASK_PAUSED) and title:
            task = Task(title=title)
            if snap.phase is Phase.TASK_RUNNING:
                self.state = TaskRunning(task, remaining)
            else:
                self.state = TaskPaused(task, remaining)
        elif snap.phase is Phase.BREAK_RUNNING:
            self.state = BreakRunning(remaining)
        elif snap.phase is Phase.BREAK_PAUSED:
            self.state = BreakPaused(remaining)
        else:
            self.state = Idle()

        self.last_tick = snap.last_tick
        log.info(
            "timer_restored",
            phase=self.phase.value,
            task=title or None,
            remaining=str(remaining),
        )
