# src/todo_countdown/tasks/persistence.py

"""
Persistence adapter between TaskStore and a key/value store.

Stored entries:
- "items":  JSON list of task records (see Task.to_record)
- "filter": one of all/active/completed
- "theme":  one of light/dark

Reading is best-effort: a missing or corrupted value is replaced by an empty
collection / default mode and never raised to the caller. Writing is not:
a failing write propagates, because disk state must never lag memory.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from ..core.ports import KeyValueStore
from .task_models import FilterMode, Task, ThemeMode

logger = logging.getLogger(__name__)

ITEMS_KEY = "items"
FILTER_KEY = "filter"
THEME_KEY = "theme"


@dataclass(slots=True)
class DecodedTasks:
    tasks: list[Task] = field(default_factory=list)
    # True when something was stored but had to be (partly) discarded.
    recovered: bool = False


@dataclass(slots=True)
class LoadedState:
    tasks: list[Task]
    filter: FilterMode
    recovered: bool = False


def encode_tasks(tasks: Iterable[Task]) -> str:
    return json.dumps([t.to_record() for t in tasks], ensure_ascii=False)


def decode_tasks(raw: str | bytes | None) -> DecodedTasks:
    """Never raises. Returns an empty collection for anything unusable."""
    if raw is None:
        return DecodedTasks()

    try:
        data = json.loads(raw)
    except (ValueError, TypeError):
        return DecodedTasks(recovered=True)

    if not isinstance(data, list):
        return DecodedTasks(recovered=True)

    out: list[Task] = []
    seen: set[str] = set()
    dropped = 0
    for rec in data:
        task = Task.from_record(rec)
        if task is None or task.id in seen:
            dropped += 1
            continue
        seen.add(task.id)
        out.append(task)

    return DecodedTasks(tasks=out, recovered=dropped > 0)


def decode_filter(raw: str | bytes | None) -> FilterMode:
    """Only the exact stored values are accepted; anything else is ALL."""
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    for mode in FilterMode:
        if raw == mode.value:
            return mode
    return FilterMode.ALL


class TaskPersistence:
    def __init__(self, kv: KeyValueStore) -> None:
        self._kv = kv

    def load(self) -> LoadedState:
        decoded = decode_tasks(self._kv.get(ITEMS_KEY))
        raw_filter = self._kv.get(FILTER_KEY)
        mode = decode_filter(raw_filter)

        recovered = decoded.recovered or (raw_filter is not None and raw_filter != mode.value)
        if recovered:
            logger.warning(
                "Stored state was corrupted; recovered tasks=%d filter=%s",
                len(decoded.tasks),
                mode.value,
            )
        return LoadedState(tasks=decoded.tasks, filter=mode, recovered=recovered)

    def save(self, tasks: Iterable[Task]) -> None:
        self._kv.set(ITEMS_KEY, encode_tasks(tasks))

    def save_filter(self, mode: FilterMode) -> None:
        self._kv.set(FILTER_KEY, mode.value)

    def load_theme(self, default: ThemeMode = ThemeMode.LIGHT) -> ThemeMode:
        return ThemeMode.parse(self._kv.get(THEME_KEY), default)

    def save_theme(self, mode: ThemeMode) -> None:
        self._kv.set(THEME_KEY, mode.value)
