# src/todo_countdown/view/reconciler.py

from __future__ import annotations

"""
Store -> view reconciliation.

The reconciler keeps a registry (task id -> node handle) of what is currently
shown and turns single-task mutations into the smallest view change:

- add      -> prepend one node (if it matches the filter)
- update   -> patch in place, or remove if it stopped matching,
              or full rebuild if a hidden task now matches
- delete   -> remove one node
- filter   -> full rebuild (the only place where order is re-derived)

After every event the list summary (progress, remaining count, whether
"clear completed" is available) is recomputed from the store.
"""

import logging
import math
from collections.abc import Callable
from datetime import datetime

from ..core.ports import ListSummary, ListView, NodeContent, NodeHandle
from ..tasks.countdown import Countdown, due_label, format_countdown
from ..tasks.task_filter import matches
from ..tasks.task_models import Task
from ..tasks.task_store import TaskCounts, TaskStore

logger = logging.getLogger(__name__)


def build_summary(counts: TaskCounts) -> ListSummary:
    total = counts.total
    done = counts.completed
    # half rounds up
    percent = 0 if total == 0 else int(math.floor(done * 100 / total + 0.5))
    remaining = counts.remaining
    noun = "task" if remaining == 1 else "tasks"
    return ListSummary(
        total=total,
        completed=done,
        remaining=remaining,
        percent=max(0, min(100, percent)),
        progress_text=f"{done}/{total} tasks completed ({percent}%)",
        remaining_label=f"{remaining} {noun} left",
        clear_enabled=done > 0,
    )


def node_content(task: Task) -> NodeContent:
    return NodeContent(
        task_id=task.id,
        text=task.text,
        completed=task.completed,
        due_label=due_label(task.due_date),
    )


class Reconciler:
    def __init__(
        self,
        store: TaskStore,
        view: ListView,
        *,
        clock: Callable[[], datetime] = datetime.now,
        animate: bool = True,
    ) -> None:
        self._store = store
        self._view = view
        self._clock = clock
        self._animate = animate
        self._nodes: dict[str, NodeHandle] = {}
        self.rebuild_count = 0

    # ---- registry ----

    def handle_for(self, task_id: str) -> NodeHandle | None:
        return self._nodes.get(task_id)

    def is_visible(self, task_id: str) -> bool:
        return task_id in self._nodes

    def visible_ids(self) -> list[str]:
        """Visible ids in display order (display order is store order)."""
        return [t.id for t in self._store.tasks if t.id in self._nodes]

    def __len__(self) -> int:
        return len(self._nodes)

    # ---- helpers ----

    def _countdown(self, task: Task, now: datetime | None = None) -> Countdown:
        return format_countdown(task.due_date, now or self._clock())

    def _make_node(self, task: Task) -> NodeHandle:
        handle = self._view.create_node(node_content(task), self._countdown(task))
        self._nodes[task.id] = handle
        return handle

    def _drop_node(self, task_id: str) -> None:
        handle = self._nodes.pop(task_id, None)
        if handle is not None:
            self._view.remove(handle, animate=self._animate)

    # ---- events ----

    def rebuild(self) -> None:
        self._view.clear()
        self._nodes.clear()
        for task in self._store.visible_tasks():
            self._view.append(self._make_node(task))
        self.rebuild_count += 1
        logger.debug("List rebuilt visible=%d filter=%s", len(self._nodes), self._store.filter.value)
        self.refresh_summary()

    def on_added(self, task: Task | None) -> None:
        if task is not None and task.id not in self._nodes and matches(task, self._store.filter):
            self._view.prepend(self._make_node(task), animate=self._animate)
        self.refresh_summary()

    def on_updated(self, task: Task | None) -> None:
        """Handles both update and toggle."""
        if task is None:
            return

        handle = self._nodes.get(task.id)
        visible_now = matches(task, self._store.filter)

        if handle is not None:
            if visible_now:
                self._view.patch_node(handle, node_content(task), self._countdown(task))
            else:
                self._drop_node(task.id)
            self.refresh_summary()
            return

        if visible_now:
            # position among visible siblings would need the whole order anyway
            self.rebuild()
            return
        self.refresh_summary()

    def on_deleted(self, task_id: str | None) -> None:
        if task_id is None:
            return
        self._drop_node(task_id)
        self.refresh_summary()

    def on_filter_changed(self) -> None:
        self.rebuild()

    def on_cleared(self, removed: int) -> None:
        if removed > 0:
            self.rebuild()

    def refresh_summary(self) -> None:
        self._view.set_summary(build_summary(self._store.counts()))

    def repaint_countdowns(self, now: datetime | None = None) -> int:
        """Repaint only the countdown fragment of every visible node."""
        current = now or self._clock()
        painted = 0
        for task_id, handle in list(self._nodes.items()):
            task = self._store.get(task_id)
            if task is None:
                continue
            self._view.paint_countdown(handle, self._countdown(task, current))
            painted += 1
        return painted

    # ---- inline editor plumbing ----

    def show_editor(self, task_id: str, value: str) -> bool:
        handle = self._nodes.get(task_id)
        if handle is None:
            return False
        self._view.show_editor(handle, value)
        return True

    def hide_editor(self, task_id: str) -> None:
        handle = self._nodes.get(task_id)
        if handle is not None:
            self._view.hide_editor(handle)

    def teardown(self) -> None:
        self._view.clear()
        self._nodes.clear()
