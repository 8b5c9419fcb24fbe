"""Tests for the progress bar view model."""

import datetime as dt

from core.timer_engine import EngineSnapshot
from domain.models import Phase
from ui.progress import GREEN, MAGENTA, describe_progress, format_time


def snap(phase, remaining, title=None, running=True):
    return EngineSnapshot(
        phase=phase,
        remaining=remaining,
        task_title=title,
        is_running=running,
    )


class TestFormatTime:
    def test_minutes_seconds(self):
        assert format_time(dt.timedelta(minutes=25)) == "25:00"
        assert format_time(dt.timedelta(seconds=61.9)) == "01:01"

    def test_negative_is_zero(self):
        assert format_time(dt.timedelta(seconds=-5)) == "00:00"


class TestDescribeProgress:
    def test_idle_has_no_bar(self, config):
        assert describe_progress(snap(Phase.IDLE, dt.timedelta(0)), config) is None

    def test_running_task(self, config):
        view = describe_progress(
            snap(Phase.TASK_RUNNING, dt.timedelta(minutes=20), "A"), config
        )
        assert view.label == "A / 20:00"
        assert view.fraction == 0.2
        assert view.color == GREEN
        assert view.style == "Running.Horizontal.TProgressbar"

    def test_paused_break(self, config):
        view = describe_progress(
            snap(Phase.BREAK_PAUSED, dt.timedelta(minutes=1), running=False), config
        )
        assert view.label == "[PAUSED] BREAK TIME / 01:00"
        assert view.fraction == 0.8
        assert view.color == MAGENTA
        assert view.style == "Paused.Horizontal.TProgressbar"

    def test_fraction_clamped(self, config):
        view = describe_progress(
            snap(Phase.BREAK_RUNNING, dt.timedelta(minutes=99)), config
        )
        assert view.fraction == 0.0
