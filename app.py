#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from core.config import PomodoroConfig
from core.log import configure_logging
from core.timer_engine import TimerEngine
from services.task_service import TaskService
from services.timer_service import TimerService
from storage.db import Database
from storage.repos import AppStateRepo, ProgressionRepo, TaskFileRepo
from ui.main_window import MainWindow


def main():
    config = PomodoroConfig()
    configure_logging(config.log_level)

    db = Database(db_path=config.db_path)
    db.init_schema()

    task_service = TaskService(TaskFileRepo(config.task_file))
    engine = TimerEngine(task_service.queue, config)
    timer_service = TimerService(engine, ProgressionRepo(AppStateRepo(db)))

    app = MainWindow(task_service, timer_service, config)
    try:
        app.run()
    finally:
        db.close()


if __name__ == "__main__":
    main()
