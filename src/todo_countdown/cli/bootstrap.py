# src/todo_countdown/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the key/value store, task store, view, reconciler and countdown tick
  into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import KeyValueStore
from ..core.state import AppState
from ..core.theme import ThemePreference
from ..tasks.kv_store import SqliteKeyValueStore
from ..tasks.persistence import TaskPersistence
from ..tasks.task_store import TaskStore
from ..view.reconciler import Reconciler
from ..view.text_view import TextListView
from ..view.tick_scheduler import TickScheduler

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, kv: KeyValueStore | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the key/value backend) injectable makes the app
    easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if kv is None:
        _ensure_local_dirs(settings)
        kv = SqliteKeyValueStore(settings.db_path)

    persistence = TaskPersistence(kv)
    store = TaskStore(persistence)
    view = TextListView()
    reconciler = Reconciler(store, view, animate=bool(getattr(settings, "animations", True)))
    ticker = TickScheduler(reconciler, interval_seconds=float(getattr(settings, "tick_seconds", 1.0)))
    theme = ThemePreference(persistence, getattr(settings, "default_theme", "light"))

    state = AppState(
        settings=settings,
        store=store,
        view=view,
        reconciler=reconciler,
        ticker=ticker,
        theme=theme,
    )
    return state
