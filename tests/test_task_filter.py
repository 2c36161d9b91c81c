# tests/test_task_filter.py

from __future__ import annotations

from todo_countdown.tasks.task_filter import matches, visible
from todo_countdown.tasks.task_models import FilterMode, Task


def _tasks() -> list[Task]:
    return [
        Task(id="a", text="a", completed=False),
        Task(id="b", text="b", completed=True),
        Task(id="c", text="c", completed=False),
    ]


def test_matches_by_mode() -> None:
    done = Task(id="x", text="x", completed=True)
    todo = Task(id="y", text="y", completed=False)

    assert matches(todo, FilterMode.ACTIVE) and not matches(done, FilterMode.ACTIVE)
    assert matches(done, FilterMode.COMPLETED) and not matches(todo, FilterMode.COMPLETED)
    assert matches(done, FilterMode.ALL) and matches(todo, FilterMode.ALL)


def test_unknown_mode_shows_everything() -> None:
    assert all(matches(t, "weird") for t in _tasks())


def test_visible_counts_partition_the_collection() -> None:
    tasks = _tasks()
    active = visible(tasks, FilterMode.ACTIVE)
    completed = visible(tasks, FilterMode.COMPLETED)

    assert [t.id for t in active] == ["a", "c"]
    assert [t.id for t in completed] == ["b"]
    assert len(active) + len(completed) == len(visible(tasks, FilterMode.ALL)) == len(tasks)


def test_filter_mode_parse() -> None:
    assert FilterMode.parse(" Active ") is FilterMode.ACTIVE
    assert FilterMode.parse(None) is FilterMode.ALL
    assert FilterMode.parse(3) is FilterMode.ALL
