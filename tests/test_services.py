"""Tests for TaskService and TimerService orchestration."""

import datetime as dt

import pytest

from core.task_queue import TaskQueue
from core.timer_engine import TimerEngine
from domain.models import Phase, TaskPaused
from services.task_service import TaskService
from services.timer_service import TimerService, close_session


@pytest.fixture
def task_service(task_file):
    task_file.save(["A", "B"])
    svc = TaskService(task_file)
    svc.load()
    return svc


@pytest.fixture
def timer_service(task_service, progression, config, clock):
    engine = TimerEngine(task_service.queue, config)
    return TimerService(engine, progression, clock=clock)


class TestTaskService:
    def test_load_fills_queue(self, task_service):
        assert [t.title for t in task_service.list_tasks()] == ["A", "B"]

    def test_add_strips_and_ignores_blank(self, task_service):
        assert task_service.add_task("   ") is None
        task = task_service.add_task("  C  ")
        assert task.title == "C"
        assert task_service.queue.titles() == ["A", "B", "C"]

    def test_edits_then_save(self, task_service, task_file):
        task_service.move_down(0)
        task_service.rename_task(0, "Bee")
        task_service.remove_task(1)
        task_service.save()
        assert task_file.load() == ["Bee"]

    def test_started_task_is_not_saved(self, task_service, timer_service, task_file):
        timer_service.start_task()
        task_service.save()
        assert task_file.load() == ["B"]


class TestTimerServiceCallbacks:
    def test_state_change_fires_only_on_change(self, timer_service):
        seen = []
        timer_service.set_on_state_change(lambda s: seen.append(s.phase))
        timer_service.pause_task()
        timer_service.start_task()
        timer_service.pause_task()
        assert seen == [Phase.TASK_RUNNING, Phase.TASK_PAUSED]

    def test_expired_fires_when_running_phase_hits_zero(self, timer_service, clock):
        expired = []
        timer_service.set_on_expired(lambda s: expired.append(s.phase))
        timer_service.start_task()
        timer_service.tick()
        clock.advance(24 * 60)
        timer_service.tick()
        assert expired == []
        clock.advance(61)
        timer_service.tick()
        assert expired == [Phase.TASK_RUNNING]

    def test_tick_emits_snapshot(self, timer_service, clock):
        ticks = []
        timer_service.set_on_tick(lambda s: ticks.append(s.remaining))
        timer_service.start_break()
        timer_service.tick()
        clock.advance(30)
        timer_service.tick()
        assert ticks[-1] == dt.timedelta(minutes=4, seconds=30)


class TestTimerServicePersistence:
    def test_close_while_idle_saves_nothing(self, timer_service, progression):
        timer_service.close()
        assert progression.load() is None

    def test_close_and_reopen_restores_paused_task(
        self, timer_service, progression, config, clock
    ):
        timer_service.start_task()
        timer_service.tick()
        clock.advance(100)
        timer_service.tick()
        timer_service.pause_task()
        timer_service.close()

        reopened = TimerService(TimerEngine(TaskQueue(), config), progression, clock=clock)
        reopened.open()
        engine = reopened.engine
        assert isinstance(engine.state, TaskPaused)
        assert engine.active_task.title == "A"
        assert engine.remaining == dt.timedelta(minutes=25) - dt.timedelta(seconds=100)

    def test_running_timer_keeps_counting_while_closed(
        self, timer_service, progression, config, clock
    ):
        timer_service.start_break()
        timer_service.tick()
        timer_service.close()

        clock.advance(120)
        reopened = TimerService(TimerEngine(TaskQueue(), config), progression, clock=clock)
        reopened.open()
        reopened.tick()
        assert reopened.engine.remaining == dt.timedelta(minutes=3)

    def test_disabled_flag_is_ignored(self, timer_service, app_state):
        app_state.set("Pomodoro.enable", "false")
        app_state.set("Pomodoro.pomodoroState", "BreakRunning")
        timer_service.open()
        assert timer_service.engine.phase is Phase.IDLE

    @pytest.mark.parametrize("kind", ["task", "break"])
    def test_stop_clears_progression(self, timer_service, progression, kind):
        start = getattr(timer_service, f"start_{kind}")
        stop = getattr(timer_service, f"stop_{kind}")
        start()
        timer_service.close()
        assert progression.load() is not None
        stop()
        assert progression.load() is None

    def test_break_done_clears_progression(self, timer_service, progression):
        timer_service.start_break()
        timer_service.close()
        timer_service.complete_break(next_task=False)
        assert timer_service.engine.phase is Phase.IDLE
        assert progression.load() is None

    def test_not_finished_scenario(self, timer_service, task_service, clock):
        timer_service.start_task()
        timer_service.tick()
        clock.advance(1500)
        timer_service.tick()
        assert timer_service.engine.is_expired
        timer_service.complete_task(finished=False)
        assert task_service.queue.titles() == ["A", "B"]
        assert timer_service.engine.phase is Phase.BREAK_RUNNING
        assert timer_service.engine.remaining == dt.timedelta(minutes=5)


class TestCorruptProgression:
    def test_huge_duration_opens_with_zero_remaining(self, timer_service, app_state):
        app_state.set("Pomodoro.enable", "true")
        app_state.set("Pomodoro.pomodoroState", "TaskPaused")
        app_state.set("Pomodoro.workingTask", "A")
        app_state.set("Pomodoro.duration", "99999999999999999999")
        timer_service.open()
        engine = timer_service.engine
        assert engine.phase is Phase.TASK_PAUSED
        assert engine.active_task.title == "A"
        assert engine.remaining == dt.timedelta(0)


class TestCloseSession:
    def test_progression_saved_even_if_task_file_fails(
        self, task_service, timer_service, progression, monkeypatch
    ):
        timer_service.start_task()

        def broken_save(titles):
            raise OSError("disk full")

        monkeypatch.setattr(task_service.repo, "save", broken_save)
        with pytest.raises(OSError):
            close_session(task_service, timer_service)

        snap = progression.load()
        assert snap is not None
        assert snap.phase is Phase.TASK_RUNNING
        assert snap.task_title == "A"

    def test_writes_tasks_and_progression(
        self, task_service, timer_service, progression, task_file
    ):
        timer_service.start_break()
        close_session(task_service, timer_service)
        assert task_file.load() == ["A", "B"]
        assert progression.load().phase is Phase.BREAK_RUNNING
