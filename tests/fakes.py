# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from todo_countdown.core.ports import ListSummary, NodeContent
from todo_countdown.tasks.countdown import Countdown


class MemoryKeyValueStore:
    """
    In-memory KeyValueStore used by unit tests.

    - Captures writes for assertions (persist-before-render checks)
    - Can be pre-seeded with raw (possibly corrupted) values
    """

    def __init__(self, data: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(data or {})
        self.writes: list[tuple[str, str]] = []

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value
        self.writes.append((key, value))


class FailingKeyValueStore(MemoryKeyValueStore):
    """Reads keep working; once `broken` is set every write raises OSError."""

    def __init__(self, data: dict[str, str] | None = None) -> None:
        super().__init__(data)
        self.broken = False

    def set(self, key: str, value: str) -> None:
        if self.broken:
            raise OSError("disk full")
        super().set(key, value)


@dataclass(slots=True)
class FakeNode:
    content: NodeContent
    countdown: Countdown
    editor: str | None = None


@dataclass(slots=True)
class RecordingListView:
    """
    Fake ListView used by reconciler tests.

    Keeps the visible order and an operation log, so tests can assert
    "one prepend, no rebuild" style properties.
    """

    order: list[FakeNode] = field(default_factory=list)
    ops: list[tuple[str, Any]] = field(default_factory=list)
    summary: ListSummary | None = None

    def create_node(self, content: NodeContent, countdown: Countdown) -> FakeNode:
        self.ops.append(("create", content.task_id))
        return FakeNode(content=content, countdown=countdown)

    def patch_node(self, handle: FakeNode, content: NodeContent, countdown: Countdown) -> None:
        self.ops.append(("patch", content.task_id))
        handle.content = content
        handle.countdown = countdown

    def paint_countdown(self, handle: FakeNode, countdown: Countdown) -> None:
        self.ops.append(("paint", handle.content.task_id))
        handle.countdown = countdown

    def prepend(self, handle: FakeNode, *, animate: bool = True) -> None:
        self.ops.append(("prepend", handle.content.task_id))
        self.order.insert(0, handle)

    def append(self, handle: FakeNode) -> None:
        self.ops.append(("append", handle.content.task_id))
        self.order.append(handle)

    def remove(self, handle: FakeNode, *, animate: bool = True) -> None:
        self.ops.append(("remove", handle.content.task_id))
        self.order = [n for n in self.order if n is not handle]

    def clear(self) -> None:
        self.ops.append(("clear", None))
        self.order = []

    def show_editor(self, handle: FakeNode, value: str) -> None:
        self.ops.append(("show_editor", handle.content.task_id))
        handle.editor = value

    def hide_editor(self, handle: FakeNode) -> None:
        self.ops.append(("hide_editor", handle.content.task_id))
        handle.editor = None

    def set_summary(self, summary: ListSummary) -> None:
        self.summary = summary

    @property
    def ids(self) -> list[str]:
        return [n.content.task_id for n in self.order]

    def names(self, kind: str) -> list[Any]:
        return [arg for op, arg in self.ops if op == kind]
