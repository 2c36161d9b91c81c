# src/todo_countdown/tasks/task_filter.py

from __future__ import annotations

from collections.abc import Iterable

from .task_models import FilterMode, Task


def matches(task: Task, mode: FilterMode | str) -> bool:
    """Unrecognized modes behave like ALL."""
    if mode == FilterMode.ACTIVE:
        return not task.completed
    if mode == FilterMode.COMPLETED:
        return bool(task.completed)
    return True


def visible(tasks: Iterable[Task], mode: FilterMode | str) -> list[Task]:
    return [t for t in tasks if matches(t, mode)]
