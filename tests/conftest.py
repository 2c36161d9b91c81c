# tests/conftest.py

from __future__ import annotations

import itertools
from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_countdown.core.state import AppState
from todo_countdown.core.theme import ThemePreference
from todo_countdown.tasks.persistence import TaskPersistence
from todo_countdown.tasks.task_store import TaskStore
from todo_countdown.view.reconciler import Reconciler
from todo_countdown.view.text_view import TextListView
from todo_countdown.view.tick_scheduler import TickScheduler

from .fakes import MemoryKeyValueStore, RecordingListView

FIXED_NOW = datetime(2030, 6, 15, 12, 0, 0)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and AppState.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="todo-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        db_path=tmp_path / "todo.sqlite3",
        tick_seconds=0.01,
        default_theme="light",
        animations=False,
        quiet_tick_logs=True,
    )


@pytest.fixture()
def kv() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture()
def persistence(kv: MemoryKeyValueStore) -> TaskPersistence:
    return TaskPersistence(kv)


@pytest.fixture()
def id_factory():
    counter = itertools.count(1)
    return lambda: f"t{next(counter):04d}"


@pytest.fixture()
def store(persistence: TaskPersistence, id_factory) -> TaskStore:
    return TaskStore(persistence, clock_ms=lambda: 1_700_000_000_000, id_factory=id_factory)


@pytest.fixture()
def view() -> RecordingListView:
    return RecordingListView()


@pytest.fixture()
def reconciler(store: TaskStore, view: RecordingListView) -> Reconciler:
    return Reconciler(store, view, clock=lambda: FIXED_NOW)


@pytest.fixture()
def state(settings: SimpleNamespace, persistence: TaskPersistence, store: TaskStore) -> AppState:
    """
    AppState wired with the real text view and an in-memory key/value store.
    """
    text_view = TextListView()
    rec = Reconciler(store, text_view, clock=lambda: FIXED_NOW, animate=False)
    return AppState(
        settings=settings,
        store=store,
        view=text_view,
        reconciler=rec,
        ticker=TickScheduler(rec, interval_seconds=settings.tick_seconds, clock=lambda: FIXED_NOW),
        theme=ThemePreference(persistence, settings.default_theme),
    )
