# -*- coding: utf-8 -*-

from typing import Iterable, Iterator, List, Optional

from domain.models import Task


class TaskQueue:
    """
    Ordered list of pending (not yet started) tasks.

    Pure list edits; index arguments out of range are ignored.
    """

    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        self._tasks: List[Task] = list(tasks or [])

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    def __getitem__(self, index: int) -> Task:
        return self._tasks[index]

    def titles(self) -> List[str]:
        return [t.title for t in self._tasks]

    def _valid(self, index: int) -> bool:
        return 0 <= index < len(self._tasks)

    # ---- edits ----
    def add(self, title: str) -> Task:
        task = Task(title=title)
        self._tasks.append(task)
        return task

    def remove(self, index: int) -> Optional[Task]:
        if not self._valid(index):
            return None
        return self._tasks.pop(index)

    def rename(self, index: int, title: str) -> bool:
        if not self._valid(index):
            return False
        self._tasks[index].title = title
        return True

    def move_up(self, index: int) -> bool:
        if not self._valid(index) or index == 0:
            return False
        t = self._tasks
        t[index - 1], t[index] = t[index], t[index - 1]
        return True

    def move_down(self, index: int) -> bool:
        if not self._valid(index) or index == len(self._tasks) - 1:
            return False
        t = self._tasks
        t[index + 1], t[index] = t[index], t[index + 1]
        return True

    # ---- used by the timer ----
    def pop_front(self) -> Optional[Task]:
        if not self._tasks:
            return None
        return self._tasks.pop(0)

    def push_front(self, task: Task) -> None:
        self._tasks.insert(0, task)

    def replace(self, titles: Iterable[str]) -> None:
        self._tasks = [Task(title=s) for s in titles]
