# src/todo_countdown/view/text_view.py

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..core.ports import ListSummary, NodeContent
from ..tasks.countdown import Countdown

logger = logging.getLogger(__name__)

ENTER = "enter"
EXIT = "exit"


@dataclass(slots=True)
class TextNode:
    task_id: str
    text: str
    completed: bool
    due_label: str
    countdown_label: str = ""
    overdue: bool = False
    editing: bool = False
    edit_value: str = ""
    transition: str | None = None


class TextListView:
    """
    Terminal rendition of the task list.

    Nodes are plain records; the console connector turns them into lines.
    Transitions are two-step: an entering node is flagged until the next
    settle(), an exiting node stays visible (flagged) until settle() drops it.
    """

    def __init__(self) -> None:
        self._items: list[TextNode] = []
        self.summary: ListSummary | None = None

    # ---- ListView port ----

    def create_node(self, content: NodeContent, countdown: Countdown) -> TextNode:
        node = TextNode(
            task_id=content.task_id,
            text=content.text,
            completed=content.completed,
            due_label=content.due_label,
        )
        self.paint_countdown(node, countdown)
        return node

    def patch_node(self, handle: TextNode, content: NodeContent, countdown: Countdown) -> None:
        handle.text = content.text
        handle.completed = content.completed
        handle.due_label = content.due_label
        self.paint_countdown(handle, countdown)

    def paint_countdown(self, handle: TextNode, countdown: Countdown) -> None:
        handle.countdown_label = countdown.label
        handle.overdue = countdown.is_overdue

    def prepend(self, handle: TextNode, *, animate: bool = True) -> None:
        handle.transition = ENTER if animate else None
        self._items.insert(0, handle)

    def append(self, handle: TextNode) -> None:
        self._items.append(handle)

    def remove(self, handle: TextNode, *, animate: bool = True) -> None:
        if animate:
            handle.transition = EXIT
            return
        self._drop(handle)

    def clear(self) -> None:
        self._items = []

    def show_editor(self, handle: TextNode, value: str) -> None:
        handle.editing = True
        handle.edit_value = value

    def hide_editor(self, handle: TextNode) -> None:
        handle.editing = False
        handle.edit_value = ""

    def set_summary(self, summary: ListSummary) -> None:
        self.summary = summary

    # ---- helpers ----

    def _drop(self, handle: TextNode) -> None:
        self._items = [n for n in self._items if n is not handle]

    @property
    def nodes(self) -> list[TextNode]:
        """Nodes that are (still) part of the list, exiting ones excluded."""
        return [n for n in self._items if n.transition != EXIT]

    def settle(self) -> None:
        """Finish pending transitions (the terminal has no animation frames)."""
        self._items = [n for n in self._items if n.transition != EXIT]
        for n in self._items:
            n.transition = None

    def render(self, *, header: str = "") -> list[str]:
        lines: list[str] = []
        if header:
            lines.append(header)

        if not self._items:
            lines.append("  (no tasks)")

        pos = 0
        for node in self._items:
            if node.transition == EXIT:
                marker, num = "-", "  "
            else:
                pos += 1
                marker, num = ("+" if node.transition == ENTER else " "), f"{pos:>2}"
            check = "[x]" if node.completed else "[ ]"
            if node.editing:
                body = f"edit> {node.edit_value}"
            else:
                body = node.text
            flag = " !" if node.overdue else ""
            lines.append(f"{marker}{num}. {check} {body}")
            lines.append(f"        {node.due_label} | {node.countdown_label}{flag}")

        if self.summary is not None:
            s = self.summary
            lines.append("")
            lines.append(f"  {s.progress_text}  {s.remaining_label}")
            if s.clear_enabled:
                lines.append("  /clear removes completed tasks")
        return lines
