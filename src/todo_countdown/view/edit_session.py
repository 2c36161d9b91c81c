# src/todo_countdown/view/edit_session.py

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import StrEnum
from typing import Protocol

from ..tasks.task_models import Task

logger = logging.getLogger(__name__)


class EditPhase(StrEnum):
    IDLE = "idle"
    EDITING = "editing"


class EditOutcome(StrEnum):
    IGNORED = "ignored"
    UPDATED = "updated"
    DELETED = "deleted"
    UNCHANGED = "unchanged"
    CANCELLED = "cancelled"


class EditorSurface(Protocol):
    """The part of the reconciler an edit session draws on."""

    def show_editor(self, task_id: str, value: str) -> bool: ...
    def hide_editor(self, task_id: str) -> None: ...


class EditSession:
    """
    Inline edit of one task's text.

    Idle -> Editing on begin(); back to Idle on commit() or cancel().
    Commit with text that trims to empty deletes the task. Commit with the
    original text is a no-op (no store write).
    """

    def __init__(
        self,
        task_id: str,
        surface: EditorSurface,
        *,
        on_update: Callable[[str, str], object],
        on_delete: Callable[[str], object],
    ) -> None:
        self.task_id = task_id
        self.phase = EditPhase.IDLE
        self.value = ""
        self._original = ""
        self._surface = surface
        self._on_update = on_update
        self._on_delete = on_delete

    @property
    def editing(self) -> bool:
        return self.phase is EditPhase.EDITING

    def begin(self, current_text: str) -> bool:
        if self.editing:
            return False
        if not self._surface.show_editor(self.task_id, current_text):
            return False
        self.phase = EditPhase.EDITING
        self.value = current_text
        self._original = current_text
        return True

    def set_value(self, value: str) -> None:
        if self.editing:
            self.value = value

    def commit(self, value: str | None = None) -> EditOutcome:
        """Enter, or blur without cancel. None means "whatever is in the field"."""
        if not self.editing:
            return EditOutcome.IGNORED

        text = (self.value if value is None else value).strip()
        self.phase = EditPhase.IDLE
        self._surface.hide_editor(self.task_id)

        if not text:
            self._on_delete(self.task_id)
            return EditOutcome.DELETED
        if text == self._original:
            return EditOutcome.UNCHANGED
        self._on_update(self.task_id, text)
        return EditOutcome.UPDATED

    def cancel(self) -> EditOutcome:
        if not self.editing:
            return EditOutcome.IGNORED
        self.phase = EditPhase.IDLE
        self._surface.hide_editor(self.task_id)
        return EditOutcome.CANCELLED

    def detach(self) -> None:
        """The node went away underneath the editor: drop back to Idle, no store call."""
        self.phase = EditPhase.IDLE


class EditSessions:
    """Open edit sessions keyed by task id (at most one per task)."""

    def __init__(
        self,
        surface: EditorSurface,
        lookup: Callable[[str], Task | None],
        *,
        on_update: Callable[[str, str], object],
        on_delete: Callable[[str], object],
    ) -> None:
        self._surface = surface
        self._lookup = lookup
        self._on_update = on_update
        self._on_delete = on_delete
        self._sessions: dict[str, EditSession] = {}

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._sessions

    @property
    def active_ids(self) -> list[str]:
        return list(self._sessions)

    def get(self, task_id: str) -> EditSession | None:
        return self._sessions.get(task_id)

    def begin(self, task_id: str) -> bool:
        if task_id in self._sessions:
            logger.debug("edit already open id=%s", task_id)
            return False

        task = self._lookup(task_id)
        if task is None:
            return False

        session = EditSession(
            task_id,
            self._surface,
            on_update=self._on_update,
            on_delete=self._on_delete,
        )
        if not session.begin(task.text):
            return False
        self._sessions[task_id] = session
        return True

    def commit(self, task_id: str, value: str | None = None) -> EditOutcome:
        session = self._sessions.pop(task_id, None)
        if session is None:
            return EditOutcome.IGNORED
        return session.commit(value)

    def cancel(self, task_id: str) -> EditOutcome:
        session = self._sessions.pop(task_id, None)
        if session is None:
            return EditOutcome.IGNORED
        return session.cancel()

    def blur_all(self) -> dict[str, EditOutcome]:
        """Focus moved elsewhere: every open editor commits its current value."""
        outcomes: dict[str, EditOutcome] = {}
        for task_id in list(self._sessions):
            outcomes[task_id] = self.commit(task_id)
        return outcomes

    def discard(self, task_id: str) -> None:
        """Forget a session whose node is gone (no store mutation)."""
        session = self._sessions.pop(task_id, None)
        if session is not None:
            session.detach()

    def refresh(self) -> list[str]:
        """
        Re-attach open editors after the list changed under them.

        A rebuild recreates nodes without their editor, and a filter can hide
        a node outright. Sessions whose node is back get the editor shown again
        with the value typed so far; the others are discarded. Returns the ids
        of discarded sessions.
        """
        dropped: list[str] = []
        for task_id, session in list(self._sessions.items()):
            if self._surface.show_editor(task_id, session.value):
                continue
            self.discard(task_id)
            dropped.append(task_id)
        if dropped:
            logger.debug("edit sessions dropped with their nodes ids=%s", dropped)
        return dropped
