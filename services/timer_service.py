# -*- coding: utf-8 -*-

import datetime as dt
from typing import Callable, Optional

from core.log import get_logger
from core.timer_engine import EngineSnapshot, TimerEngine
from domain.models import Phase
from services.task_service import TaskService
from storage.repos import ProgressionRepo

log = get_logger(__name__)

Listener = Callable[[EngineSnapshot], None]


class TimerService:
    """
    Orchestrates:
    - TimerEngine state
    - progression backup/restore across application restarts
    - Callbacks for UI
    """

    def __init__(
        self,
        engine: TimerEngine,
        progression: ProgressionRepo,
        clock: Callable[[], dt.datetime] = dt.datetime.now,
    ):
        self.engine = engine
        self.progression = progression
        self.clock = clock

        self._on_tick: Optional[Listener] = None
        self._on_state_change: Optional[Listener] = None
        self._on_expired: Optional[Listener] = None

    # ----- Callbacks -----
    def set_on_tick(self, fn: Listener) -> None:
        self._on_tick = fn

    def set_on_state_change(self, fn: Listener) -> None:
        self._on_state_change = fn

    def set_on_expired(self, fn: Listener) -> None:
        self._on_expired = fn

    def _emit(self, fn: Optional[Listener]) -> None:
        if fn:
            fn(self.engine.snapshot())

    def _changed(self, changed: bool) -> bool:
        if changed:
            self._emit(self._on_state_change)
        return changed

    # ----- Lifecycle -----
    def open(self) -> None:
        snap = self.progression.load()
        if snap is None or not snap.enabled:
            return
        self.engine.restore(snap)
        self._emit(self._on_state_change)

    def close(self) -> None:
        if self.engine.phase is Phase.IDLE:
            return
        self.progression.save(self.engine.to_progression())

    # ----- Public API -----
    def get_snapshot(self) -> EngineSnapshot:
        return self.engine.snapshot()

    def start_task(self) -> bool:
        return self._changed(self.engine.start_task())

    def pause_task(self) -> bool:
        return self._changed(self.engine.pause_task())

    def resume_task(self) -> bool:
        return self._changed(self.engine.resume_task())

    def restart_task(self) -> bool:
        return self._changed(self.engine.restart_task())

    def stop_task(self) -> bool:
        stopped = self.engine.stop_task()
        if stopped:
            self.progression.clear()
        return self._changed(stopped)

    def start_break(self) -> bool:
        return self._changed(self.engine.start_break())

    def pause_break(self) -> bool:
        return self._changed(self.engine.pause_break())

    def resume_break(self) -> bool:
        return self._changed(self.engine.resume_break())

    def restart_break(self) -> bool:
        return self._changed(self.engine.restart_break())

    def stop_break(self) -> bool:
        stopped = self.engine.stop_break()
        if stopped:
            self.progression.clear()
        return self._changed(stopped)

    def complete_task(self, finished: bool) -> bool:
        return self._changed(self.engine.complete_task(finished))

    def complete_break(self, next_task: bool) -> bool:
        changed = self.engine.complete_break(next_task)
        if changed and self.engine.phase is Phase.IDLE:
            self.progression.clear()
        return self._changed(changed)

    def tick(self) -> None:
        """
        Should be called once per repaint by the UI loop.
        Fires on_expired when a running phase reaches zero.
        """
        self.engine.tick(self.clock())
        self._emit(self._on_tick)
        if self.engine.is_expired:
            self._emit(self._on_expired)


def close_session(task_service: TaskService, timer_service: TimerService) -> None:
    """Back up the running timer, then write the task file; either may raise."""
    try:
        timer_service.close()
    finally:
        task_service.save()
