"""Pytest configuration and shared fixtures."""

import datetime as dt

import pytest

from core.config import PomodoroConfig
from core.task_queue import TaskQueue
from core.timer_engine import TimerEngine
from storage.db import Database
from storage.repos import AppStateRepo, ProgressionRepo, TaskFileRepo

T0 = dt.datetime(2024, 3, 1, 9, 0, 0)


class FakeClock:
    """Manually advanced stand-in for datetime.now."""

    def __init__(self, start: dt.datetime = T0):
        self.now = start

    def __call__(self) -> dt.datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += dt.timedelta(seconds=seconds)


@pytest.fixture
def config() -> PomodoroConfig:
    return PomodoroConfig()


@pytest.fixture
def queue() -> TaskQueue:
    q = TaskQueue()
    q.add("A")
    q.add("B")
    return q


@pytest.fixture
def engine(queue, config) -> TimerEngine:
    return TimerEngine(queue, config)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def db(tmp_path):
    database = Database(db_path=str(tmp_path / "pomodoro.db"))
    database.init_schema()
    yield database
    database.close()


@pytest.fixture
def app_state(db) -> AppStateRepo:
    return AppStateRepo(db)


@pytest.fixture
def progression(app_state) -> ProgressionRepo:
    return ProgressionRepo(app_state)


@pytest.fixture
def task_file(tmp_path) -> TaskFileRepo:
    return TaskFileRepo(str(tmp_path / "PomodoroTasks.txt"))
