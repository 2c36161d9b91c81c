# src/todo_countdown/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The store and the reconciler depend on Protocols instead of concrete
implementations, so storage and presentation stay swappable and tests can use
in-memory fakes.
"""

from dataclasses import dataclass
from typing import Any, Protocol

from ..tasks.countdown import Countdown

NodeHandle = Any
# Opaque reference to one rendered list item; only the ListView interprets it.


class KeyValueStore(Protocol):
    """String key/value persistence. `set` must be durable when it returns."""

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...


@dataclass(frozen=True, slots=True)
class NodeContent:
    """Static part of a list item (everything except the countdown)."""

    task_id: str
    text: str
    completed: bool
    due_label: str


@dataclass(frozen=True, slots=True)
class ListSummary:
    total: int
    completed: int
    remaining: int
    percent: int
    progress_text: str
    remaining_label: str
    clear_enabled: bool


class ListView(Protocol):
    """
    Presentation-side port: the visible task list.

    The reconciler decides *what* changes; the view decides how a node looks
    and how entry/exit transitions are played.
    """

    def create_node(self, content: NodeContent, countdown: Countdown) -> NodeHandle: ...
    def patch_node(self, handle: NodeHandle, content: NodeContent, countdown: Countdown) -> None: ...
    def paint_countdown(self, handle: NodeHandle, countdown: Countdown) -> None: ...

    def prepend(self, handle: NodeHandle, *, animate: bool = True) -> None: ...
    def append(self, handle: NodeHandle) -> None: ...
    def remove(self, handle: NodeHandle, *, animate: bool = True) -> None: ...
    def clear(self) -> None: ...

    def show_editor(self, handle: NodeHandle, value: str) -> None: ...
    def hide_editor(self, handle: NodeHandle) -> None: ...

    def set_summary(self, summary: ListSummary) -> None: ...
