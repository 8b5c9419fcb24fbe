# -*- coding: utf-8 -*-

import tkinter as tk
from tkinter import ttk
from typing import Callable, List

from services.task_service import TaskService


class TaskListWidget(ttk.Frame):
    """Pending tasks: one editable row per task plus the add-task row."""

    def __init__(
        self,
        master,
        task_service: TaskService,
        on_request_refresh: Callable[[], None],
    ):
        super().__init__(master)

        self.task_service = task_service
        self.on_request_refresh = on_request_refresh

        self._row_vars: List[tk.StringVar] = []

        self._build_ui()
        self.refresh()

    def _build_ui(self):
        self.columnconfigure(0, weight=1)

        self.rows = ttk.Frame(self)
        self.rows.grid(row=0, column=0, sticky="ew")
        self.rows.columnconfigure(1, weight=1)

        add_row = ttk.Frame(self)
        add_row.grid(row=1, column=0, sticky="ew", pady=(6, 0))
        add_row.columnconfigure(1, weight=1)

        ttk.Label(add_row, text="New Task", width=9).grid(row=0, column=0, sticky="w")

        self.new_task_var = tk.StringVar()
        self.new_task_entry = ttk.Entry(add_row, textvariable=self.new_task_var)
        self.new_task_entry.grid(row=0, column=1, sticky="ew")
        self.new_task_entry.bind("<Return>", lambda e: self._add_task())

        ttk.Button(add_row, text="✚", width=6, command=self._add_task).grid(
            row=0, column=2, padx=(6, 0)
        )

    def refresh(self):
        for child in self.rows.winfo_children():
            child.destroy()
        self._row_vars = []

        for idx, task in enumerate(self.task_service.list_tasks()):
            ttk.Label(self.rows, text=f"Task #{idx + 1}", width=9).grid(
                row=idx, column=0, sticky="w"
            )

            var = tk.StringVar(value=task.title)
            var.trace_add("write", lambda *_a, i=idx, v=var: self._rename(i, v))
            self._row_vars.append(var)
            ttk.Entry(self.rows, textvariable=var).grid(
                row=idx, column=1, sticky="ew", pady=1
            )

            ttk.Button(
                self.rows, text="✘", width=2, command=lambda i=idx: self._remove(i)
            ).grid(row=idx, column=2, padx=(4, 0))
            ttk.Button(
                self.rows, text="↑", width=2, command=lambda i=idx: self._move_up(i)
            ).grid(row=idx, column=3)
            ttk.Button(
                self.rows, text="↓", width=2, command=lambda i=idx: self._move_down(i)
            ).grid(row=idx, column=4)

    # ---- actions ----
    def _rename(self, index: int, var: tk.StringVar):
        self.task_service.rename_task(index, var.get())

    def _add_task(self):
        if self.task_service.add_task(self.new_task_var.get()) is None:
            return
        self.new_task_var.set("")
        self._changed()

    def _remove(self, index: int):
        if self.task_service.remove_task(index) is not None:
            self._changed()

    def _move_up(self, index: int):
        if self.task_service.move_up(index):
            self._changed()

    def _move_down(self, index: int):
        if self.task_service.move_down(index):
            self._changed()

    def _changed(self):
        self.refresh()
        self.on_request_refresh()
