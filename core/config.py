# -*- coding: utf-8 -*-

import datetime as dt
from dataclasses import dataclass


@dataclass(frozen=True)
class PomodoroConfig:
    task_minutes: float = 25.0
    break_minutes: float = 5.0
    task_file: str = "PomodoroTasks.txt"
    db_path: str = "pomodoro.db"
    # host repaint cadence; the timer itself is wall-clock based
    repaint_ms: int = 200
    log_level: str = "INFO"

    def __post_init__(self):
        if self.task_minutes <= 0 or self.break_minutes <= 0:
            raise ValueError("Task and break lengths must be positive.")
        if self.repaint_ms <= 0:
            raise ValueError("Repaint interval must be positive.")

    @property
    def task_length(self) -> dt.timedelta:
        return dt.timedelta(minutes=self.task_minutes)

    @property
    def break_length(self) -> dt.timedelta:
        return dt.timedelta(minutes=self.break_minutes)
