# src/todo_countdown/core/actions.py

"""
User intents.

Each intent mutates the store first (which persists before returning) and
only then hands the result to the reconciler. Intents that can remove or
rebuild nodes re-sync open edit sessions afterwards. Invalid input is a
silent no-op, mirrored by a None / False / 0 return value.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..tasks.task_models import FilterMode, Task, ThemeMode
from ..view.edit_session import EditOutcome

if TYPE_CHECKING:
    from .state import AppState

logger = logging.getLogger(__name__)


def hydrate(state: AppState) -> None:
    """Initial render of whatever the store loaded."""
    state.reconciler.rebuild()


def add_task(state: AppState, text: str | None, due_date: str | None = None) -> Task | None:
    task = state.store.add(text, due_date)
    if task is None:
        return None
    state.reconciler.on_added(task)
    return task


def update_task(state: AppState, task_id: str, **fields: Any) -> Task | None:
    task = state.store.update(task_id, **fields)
    if task is None:
        return None
    state.reconciler.on_updated(task)
    state.editor.refresh()
    return task


def toggle_task(state: AppState, task_id: str) -> Task | None:
    task = state.store.toggle_complete(task_id)
    if task is None:
        return None
    state.reconciler.on_updated(task)
    state.editor.refresh()
    return task


def delete_task(state: AppState, task_id: str) -> str | None:
    removed = state.store.delete(task_id)
    if removed is None:
        return None
    state.editor.discard(removed)
    state.reconciler.on_deleted(removed)
    return removed


def clear_completed(state: AppState) -> int:
    state.editor.blur_all()
    removed = state.store.clear_completed()
    state.reconciler.on_cleared(removed)
    return removed


def set_filter(state: AppState, mode: FilterMode | str | None) -> FilterMode:
    state.editor.blur_all()
    applied = state.store.set_filter(mode)
    state.reconciler.on_filter_changed()
    return applied


def toggle_theme(state: AppState) -> ThemeMode:
    return state.theme.toggle()


# ---- inline edit ----


def begin_edit(state: AppState, task_id: str) -> bool:
    return state.editor.begin(task_id)


def commit_edit(state: AppState, task_id: str, value: str | None = None) -> EditOutcome:
    return state.editor.commit(task_id, value)


def cancel_edit(state: AppState, task_id: str) -> EditOutcome:
    return state.editor.cancel(task_id)


def blur_edits(state: AppState) -> dict[str, EditOutcome]:
    return state.editor.blur_all()


# ---- lookups ----


def resolve_ref(state: AppState, ref: str) -> str | None:
    """
    Map a user reference to a task id.

    - "3"      -> third visible task
    - "ab12"   -> the single task whose id starts with "ab12"
    """
    ref = (ref or "").strip().rstrip(".")
    if not ref:
        return None

    if ref.isdigit():
        ids = state.reconciler.visible_ids()
        idx = int(ref) - 1
        if 0 <= idx < len(ids):
            return ids[idx]
        return None

    hits = [t.id for t in state.store.tasks if t.id.startswith(ref)]
    if len(hits) == 1:
        return hits[0]
    if len(hits) > 1:
        logger.debug("ambiguous task ref=%s hits=%d", ref, len(hits))
    return None
