# src/todo_countdown/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field

from ..tasks.task_store import TaskStore
from ..view.edit_session import EditSessions
from ..view.reconciler import Reconciler
from ..view.text_view import TextListView
from ..view.tick_scheduler import TickScheduler
from .theme import ThemePreference


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    store: TaskStore
    view: TextListView
    reconciler: Reconciler
    ticker: TickScheduler
    theme: ThemePreference

    editor: EditSessions = field(init=False)

    def __post_init__(self) -> None:
        from . import actions

        self.editor = EditSessions(
            self.reconciler,
            self.store.get,
            on_update=lambda task_id, text: actions.update_task(self, task_id, text=text),
            on_delete=lambda task_id: actions.delete_task(self, task_id),
        )
