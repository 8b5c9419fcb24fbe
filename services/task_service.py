# services/task_service.py
#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from typing import List, Optional

from core.log import get_logger
from core.task_queue import TaskQueue
from domain.models import Task
from storage.repos import TaskFileRepo

log = get_logger(__name__)


class TaskService:
    def __init__(self, repo: TaskFileRepo, queue: Optional[TaskQueue] = None):
        self.repo = repo
        self.queue = queue if queue is not None else TaskQueue()

    # ---- persistence ----
    def load(self) -> None:
        titles = self.repo.load()
        self.queue.replace(titles)
        log.info("tasks_loaded", path=self.repo.path, count=len(titles))

    def save(self) -> None:
        titles = self.queue.titles()
        self.repo.save(titles)
        log.info("tasks_saved", path=self.repo.path, count=len(titles))

    # ---- tasks ----
    def list_tasks(self) -> List[Task]:
        return list(self.queue)

    def add_task(self, title: str) -> Optional[Task]:
        title = (title or "").strip()
        if not title:
            return None
        task = self.queue.add(title)
        log.info("task_added", title=title, position=len(self.queue))
        return task

    def remove_task(self, index: int) -> Optional[Task]:
        task = self.queue.remove(index)
        if task is not None:
            log.info("task_removed", title=task.title, index=index)
        return task

    def rename_task(self, index: int, title: str) -> bool:
        return self.queue.rename(index, title)

    def move_up(self, index: int) -> bool:
        moved = self.queue.move_up(index)
        if moved:
            log.debug("task_moved", index=index, to=index - 1)
        return moved

    def move_down(self, index: int) -> bool:
        moved = self.queue.move_down(index)
        if moved:
            log.debug("task_moved", index=index, to=index + 1)
        return moved
