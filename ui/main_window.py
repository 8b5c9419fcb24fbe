# -*- coding: utf-8 -*-

import tkinter as tk
from tkinter import ttk

from core.config import PomodoroConfig
from core.log import get_logger
from services.task_service import TaskService
from services.timer_service import TimerService, close_session
from ui.pomodoro_widget import PomodoroWidget
from ui.task_list_widget import TaskListWidget

log = get_logger(__name__)


class MainWindow:
    def __init__(
        self,
        task_service: TaskService,
        timer_service: TimerService,
        config: PomodoroConfig,
    ):
        self.task_service = task_service
        self.timer_service = timer_service
        self.config = config

        self.root = tk.Tk()
        self.root.title("🍅 Pomodoro")
        self.root.geometry("520x360")

        self._repaint_job = None

        self._on_open()
        self._build_ui()
        self.root.protocol("WM_DELETE_WINDOW", self._on_close)

    def _build_ui(self):
        outer = ttk.Frame(self.root, padding=10)
        outer.pack(fill="both", expand=True)
        outer.columnconfigure(0, weight=1)

        tasks = ttk.Labelframe(outer, text="Tasks", padding=8)
        tasks.grid(row=0, column=0, sticky="ew")
        tasks.columnconfigure(0, weight=1)

        self.task_list = TaskListWidget(
            tasks,
            task_service=self.task_service,
            on_request_refresh=self._refresh_all,
        )
        self.task_list.grid(row=0, column=0, sticky="ew")

        self.pomodoro = PomodoroWidget(
            outer,
            timer_service=self.timer_service,
            config=self.config,
            on_request_refresh=self._refresh_all,
        )
        self.pomodoro.grid(row=1, column=0, sticky="ew")

    def _refresh_all(self):
        # starting a task pops it off the list; finishing may push it back
        self.task_list.refresh()

    # ---- Repaint loop (UI-driven) ----
    def _repaint(self):
        self._repaint_job = None
        self.timer_service.tick()
        self._repaint_job = self.root.after(self.config.repaint_ms, self._repaint)

    # ---- lifecycle ----
    def _on_open(self):
        self.task_service.load()
        self.timer_service.open()
        log.info("window_opened")

    def _on_close(self):
        if self._repaint_job is not None:
            self.root.after_cancel(self._repaint_job)
            self._repaint_job = None
        try:
            close_session(self.task_service, self.timer_service)
        finally:
            log.info("window_closed")
            self.root.destroy()

    def run(self):
        self._repaint()
        self.root.mainloop()
