# src/todo_countdown/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

from .persistence import TaskPersistence
from .task_filter import matches
from .task_models import FilterMode, Task, new_task_id, now_ms

logger = logging.getLogger(__name__)

_UNSET: Any = object()


@dataclass(frozen=True, slots=True)
class TaskCounts:
    total: int
    completed: int

    @property
    def remaining(self) -> int:
        return self.total - self.completed


class TaskStore:
    """
    In-memory owner of the task collection and the active filter.

    Ordering: newest first (add prepends); update/toggle keep the position.

    Every mutator builds the new collection, writes it through the persistence
    adapter and only then swaps it in. A failing write raises and leaves memory
    as it was, so memory never runs ahead of disk. Invalid input (blank
    text, unknown id) is a silent no-op and returns None.
    """

    def __init__(
        self,
        persistence: TaskPersistence,
        *,
        clock_ms: Callable[[], int] = now_ms,
        id_factory: Callable[[], str] = new_task_id,
    ) -> None:
        self._persistence = persistence
        self._clock_ms = clock_ms
        self._id_factory = id_factory

        loaded = persistence.load()
        self._tasks: list[Task] = list(loaded.tasks)
        self._filter: FilterMode = loaded.filter
        self.recovered: bool = loaded.recovered
        logger.info(
            "TaskStore ready total=%d filter=%s recovered=%s",
            len(self._tasks),
            self._filter.value,
            self.recovered,
        )

    # ---- low-level helpers ----

    def _index_of(self, task_id: str) -> int:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return -1

    def _commit(self, tasks: list[Task]) -> None:
        # write first: a failing save leaves memory untouched
        self._persistence.save(tasks)
        self._tasks = tasks

    def _replaced(self, idx: int, task: Task) -> list[Task]:
        tasks = list(self._tasks)
        tasks[idx] = task
        return tasks

    def _fresh_id(self) -> str:
        # ids are never reused; guard against a colliding factory anyway
        existing = {t.id for t in self._tasks}
        tid = self._id_factory()
        while tid in existing:
            tid = self._id_factory()
        return tid

    # ---- queries ----

    @property
    def filter(self) -> FilterMode:
        return self._filter

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def get(self, task_id: str) -> Task | None:
        idx = self._index_of(task_id)
        return self._tasks[idx] if idx >= 0 else None

    def visible_tasks(self, mode: FilterMode | None = None) -> list[Task]:
        active = self._filter if mode is None else mode
        return [t for t in self._tasks if matches(t, active)]

    def counts(self) -> TaskCounts:
        done = sum(1 for t in self._tasks if t.completed)
        return TaskCounts(total=len(self._tasks), completed=done)

    # ---- mutations ----

    def add(self, text: str | None, due_date: str | None = None) -> Task | None:
        trimmed = (text or "").strip()
        if not trimmed:
            logger.debug("add ignored: empty text")
            return None

        due = due_date.strip() if due_date and due_date.strip() else None
        task = Task(
            id=self._fresh_id(),
            text=trimmed,
            completed=False,
            due_date=due,
            created_at=self._clock_ms(),
        )
        self._commit([task, *self._tasks])
        logger.debug("Task added id=%s due=%s", task.id, due)
        return task

    def update(
        self,
        task_id: str,
        *,
        text: Any = _UNSET,
        completed: Any = _UNSET,
        due_date: Any = _UNSET,
    ) -> Task | None:
        """
        Shallow merge of the given fields into an existing task.

        id and created_at are immutable. A text that trims to empty rejects
        the whole update (a task must never end up without text).
        """
        idx = self._index_of(task_id)
        if idx < 0:
            logger.debug("update ignored: unknown id=%s", task_id)
            return None

        changes: dict[str, Any] = {}
        if text is not _UNSET:
            trimmed = str(text or "").strip()
            if not trimmed:
                logger.debug("update ignored: empty text id=%s", task_id)
                return None
            changes["text"] = trimmed
        if completed is not _UNSET:
            changes["completed"] = bool(completed)
        if due_date is not _UNSET:
            changes["due_date"] = due_date.strip() if isinstance(due_date, str) and due_date.strip() else None

        updated = replace(self._tasks[idx], **changes)
        self._commit(self._replaced(idx, updated))
        logger.debug("Task updated id=%s fields=%s", task_id, sorted(changes))
        return updated

    def toggle_complete(self, task_id: str) -> Task | None:
        idx = self._index_of(task_id)
        if idx < 0:
            logger.debug("toggle ignored: unknown id=%s", task_id)
            return None

        task = replace(self._tasks[idx], completed=not self._tasks[idx].completed)
        self._commit(self._replaced(idx, task))
        logger.debug("Task toggled id=%s completed=%s", task_id, task.completed)
        return task

    def delete(self, task_id: str) -> str | None:
        idx = self._index_of(task_id)
        if idx < 0:
            logger.debug("delete ignored: unknown id=%s", task_id)
            return None

        self._commit(self._tasks[:idx] + self._tasks[idx + 1 :])
        logger.debug("Task deleted id=%s", task_id)
        return task_id

    def clear_completed(self) -> int:
        kept = [t for t in self._tasks if not t.completed]
        removed = len(self._tasks) - len(kept)
        if removed:
            self._commit(kept)
            logger.info("Cleared %d completed task(s)", removed)
        return removed

    def set_filter(self, mode: FilterMode | str | None) -> FilterMode:
        parsed = FilterMode.parse(mode)
        self._persistence.save_filter(parsed)
        self._filter = parsed
        logger.debug("Filter set to %s", self._filter.value)
        return self._filter
