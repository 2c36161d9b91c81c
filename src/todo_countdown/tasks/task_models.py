# src/todo_countdown/tasks/task_models.py

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class FilterMode(StrEnum):
    """Which subset of tasks the list shows."""

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, raw: Any) -> FilterMode:
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return cls.ALL
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.ALL


class ThemeMode(StrEnum):
    LIGHT = "light"
    DARK = "dark"

    @classmethod
    def parse(cls, raw: Any, default: ThemeMode | None = None) -> ThemeMode:
        fallback = default or cls.LIGHT
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return fallback
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return fallback

    def flipped(self) -> ThemeMode:
        return ThemeMode.LIGHT if self is ThemeMode.DARK else ThemeMode.DARK


def new_task_id() -> str:
    return uuid.uuid4().hex


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(slots=True)
class Task:
    id: str
    text: str
    completed: bool = False
    due_date: str | None = None
    created_at: int = 0

    def to_record(self) -> dict[str, Any]:
        """On-disk shape: exactly the persisted fields, camelCase keys."""
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "dueDate": self.due_date,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_record(cls, raw: Any) -> Task | None:
        """
        Build a Task from a stored record.

        Returns None for anything that cannot be a valid task:
        non-dict, missing/blank id, or text that trims to empty.
        """
        if not isinstance(raw, dict):
            return None

        tid = raw.get("id")
        if not isinstance(tid, str) or not tid.strip():
            return None

        text = raw.get("text")
        if not isinstance(text, str) or not text.strip():
            return None

        due = raw.get("dueDate")
        if not isinstance(due, str) or not due.strip():
            due = None

        created = raw.get("createdAt")
        if isinstance(created, bool) or not isinstance(created, (int, float)):
            created = 0

        return cls(
            id=tid,
            text=text.strip(),
            completed=raw.get("completed") is True,
            due_date=due.strip() if due else None,
            created_at=int(created),
        )
