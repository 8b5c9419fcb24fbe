# storage/repos.py
#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import os
from typing import Dict, Iterable, List, Optional

from core.log import get_logger
from domain.models import ProgressionSnapshot
from storage.db import Database

log = get_logger(__name__)


class AppStateRepo:
    def __init__(self, db: Database):
        self.db = db

    def get(self, key: str) -> Optional[str]:
        row = self.db.conn.execute(
            "SELECT value FROM app_state WHERE key=?",
            (key,),
        ).fetchone()
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        self.db.conn.execute(
            """
            INSERT INTO app_state(key, value) VALUES(?, ?)
            ON CONFLICT(key) DO UPDATE SET value=excluded.value
            """,
            (key, value),
        )
        self.db.conn.commit()

    def delete(self, key: str) -> None:
        self.db.conn.execute("DELETE FROM app_state WHERE key=?", (key,))
        self.db.conn.commit()


class ProgressionRepo:
    """Timer progression stored under `Pomodoro.*` keys of app_state."""

    PREFIX = "Pomodoro."
    FIELDS = ("enable", "pomodoroState", "workingTask", "duration", "lastTick")

    def __init__(self, state: AppStateRepo):
        self.state = state

    def _key(self, field: str) -> str:
        return f"{self.PREFIX}{field}"

    def load(self) -> Optional[ProgressionSnapshot]:
        """Returns None when nothing was stashed."""
        if self.state.get(self._key("enable")) is None:
            return None
        values: Dict[str, Optional[str]] = {
            f: self.state.get(self._key(f)) for f in self.FIELDS
        }
        snap = ProgressionSnapshot.from_values(values)
        log.debug("progression_loaded", raw=values)
        return snap

    def save(self, snap: ProgressionSnapshot) -> None:
        for field, value in snap.to_values().items():
            self.state.set(self._key(field), value)
        log.info("progression_saved", phase=snap.phase.value if snap.phase else None)

    def clear(self) -> None:
        for f in self.FIELDS:
            self.state.delete(self._key(f))
        log.info("progression_cleared")


class TaskFileRepo:
    """Pending task titles, one per line, in a plain text file."""

    def __init__(self, path: str = "PomodoroTasks.txt"):
        self.path = path

    def load(self) -> List[str]:
        if not os.path.exists(self.path):
            with open(self.path, "w", encoding="utf-8") as fh:
                fh.write("\n")

        with open(self.path, "r", encoding="utf-8") as fh:
            titles = [line.rstrip("\r\n") for line in fh]
        return [t for t in titles if t]

    def save(self, titles: Iterable[str]) -> None:
        with open(self.path, "w", encoding="utf-8") as fh:
            for title in titles:
                # a newline inside a title would split it on the next load
                fh.write(title.replace("\r", " ").replace("\n", " ") + "\n")
