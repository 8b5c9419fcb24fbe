# -*- coding: utf-8 -*-

import tkinter as tk
from tkinter import messagebox, ttk
from typing import Callable, List, Tuple

from core.config import PomodoroConfig
from core.timer_engine import EngineSnapshot
from domain.models import Phase
from services.timer_service import TimerService
from ui.progress import PROGRESS_STYLES, describe_progress

Action = Tuple[str, Callable[[], bool]]


class PomodoroWidget(ttk.Frame):
    def __init__(
        self,
        master,
        timer_service: TimerService,
        config: PomodoroConfig,
        on_request_refresh: Callable[[], None],
    ):
        super().__init__(master)

        self.timer_service = timer_service
        self.config = config
        self.on_request_refresh = on_request_refresh

        # set while a completion dialog is open
        self._prompting = False
        self._shown_phase = None

        self._build_ui()

        # wire callbacks from service -> widget UI
        self.timer_service.set_on_tick(self._on_tick)
        self.timer_service.set_on_state_change(self._on_state_change)
        self.timer_service.set_on_expired(self._on_expired)

        # initial render
        self._on_state_change(self.timer_service.get_snapshot())

    def _build_ui(self):
        self.columnconfigure(0, weight=1)

        style = ttk.Style(self)
        for color, name in PROGRESS_STYLES.items():
            style.configure(name, background=color)

        self.task_btns = ttk.Frame(self)
        self.task_btns.grid(row=0, column=0, sticky="ew", pady=(8, 2))

        self.break_btns = ttk.Frame(self)
        self.break_btns.grid(row=1, column=0, sticky="ew", pady=(2, 8))

        self.progress_var = tk.StringVar(value="")
        self.progress_label = ttk.Label(self, textvariable=self.progress_var)
        self.progress_label.grid(row=2, column=0, sticky="w")

        self.progress = ttk.Progressbar(
            self, orient="horizontal", mode="determinate", maximum=1.0
        )
        self.progress.grid(row=3, column=0, sticky="ew")

    # ---- buttons ----
    def _task_actions(self, phase: Phase) -> List[Action]:
        svc = self.timer_service
        actions: List[Action] = []
        if phase in (Phase.IDLE, Phase.BREAK_RUNNING, Phase.BREAK_PAUSED):
            actions.append(("START TASK", svc.start_task))
        if phase is Phase.TASK_RUNNING:
            actions.append(("PAUSE TASK", svc.pause_task))
        if phase is Phase.TASK_PAUSED:
            actions.append(("RESUME TASK", svc.resume_task))
        if phase in (Phase.TASK_RUNNING, Phase.TASK_PAUSED):
            actions.append(("RESTART TASK", svc.restart_task))
            actions.append(("STOP TASK", svc.stop_task))
        return actions

    def _break_actions(self, phase: Phase) -> List[Action]:
        svc = self.timer_service
        actions: List[Action] = []
        if phase in (Phase.IDLE, Phase.TASK_RUNNING, Phase.TASK_PAUSED):
            actions.append(("START BREAK", svc.start_break))
        if phase is Phase.BREAK_RUNNING:
            actions.append(("PAUSE BREAK", svc.pause_break))
        if phase is Phase.BREAK_PAUSED:
            actions.append(("RESUME BREAK", svc.resume_break))
        if phase in (Phase.BREAK_RUNNING, Phase.BREAK_PAUSED):
            actions.append(("RESTART BREAK", svc.restart_break))
            actions.append(("STOP BREAK", svc.stop_break))
        return actions

    def _rebuild_buttons(self, phase: Phase):
        for frame, actions in (
            (self.task_btns, self._task_actions(phase)),
            (self.break_btns, self._break_actions(phase)),
        ):
            for child in frame.winfo_children():
                child.destroy()
            for col, (text, fn) in enumerate(actions):
                frame.columnconfigure(col, weight=1)
                ttk.Button(frame, text=text, command=lambda f=fn: self._run(f)).grid(
                    row=0, column=col, sticky="ew", padx=(0, 4)
                )
        self._shown_phase = phase

    def _run(self, fn: Callable[[], bool]):
        if fn():
            self.on_request_refresh()

    # ---- Service callbacks ----
    def _on_tick(self, snap: EngineSnapshot):
        self._render(snap)

    def _on_state_change(self, snap: EngineSnapshot):
        if snap.phase is not self._shown_phase:
            self._rebuild_buttons(snap.phase)
        self._render(snap)

    def _on_expired(self, snap: EngineSnapshot):
        if self._prompting:
            return
        self._prompting = True
        try:
            if snap.phase is Phase.TASK_RUNNING:
                finished = messagebox.askyesno(
                    "Pomodoro",
                    "Task Finished!\n\nYes: finish task\nNo: continue task later",
                    parent=self,
                )
                self.timer_service.complete_task(finished)
            elif snap.phase is Phase.BREAK_RUNNING:
                done = messagebox.askyesno(
                    "Pomodoro",
                    "Break Finished!\n\nYes: done\nNo: next task",
                    parent=self,
                )
                self.timer_service.complete_break(next_task=not done)
        finally:
            self._prompting = False
        self.on_request_refresh()

    def _render(self, snap: EngineSnapshot):
        view = describe_progress(snap, self.config)
        if view is None:
            self.progress_var.set("")
            self.progress.configure(value=0.0)
            return

        self.progress_var.set(view.label)
        self.progress.configure(
            value=view.fraction,
            style=view.style,
        )
