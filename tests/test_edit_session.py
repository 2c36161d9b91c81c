# tests/test_edit_session.py

from __future__ import annotations

from todo_countdown.core import actions
from todo_countdown.core.state import AppState
from todo_countdown.tasks.task_models import FilterMode, Task
from todo_countdown.view.edit_session import EditOutcome, EditPhase, EditSession, EditSessions

from .fakes import MemoryKeyValueStore


class FakeSurface:
    def __init__(self, visible: bool = True) -> None:
        self.visible = visible
        self.shown: list[tuple[str, str]] = []
        self.hidden: list[str] = []

    def show_editor(self, task_id: str, value: str) -> bool:
        if not self.visible:
            return False
        self.shown.append((task_id, value))
        return True

    def hide_editor(self, task_id: str) -> None:
        self.hidden.append(task_id)


def _session(surface: FakeSurface, calls: list[tuple]) -> EditSession:
    return EditSession(
        "t1",
        surface,
        on_update=lambda tid, text: calls.append(("update", tid, text)),
        on_delete=lambda tid: calls.append(("delete", tid)),
    )


def test_state_machine_transitions() -> None:
    surface = FakeSurface()
    calls: list[tuple] = []
    s = _session(surface, calls)

    assert s.phase is EditPhase.IDLE
    assert s.begin("old") is True
    assert s.phase is EditPhase.EDITING
    assert s.begin("old") is False, "no nested editors"
    assert surface.shown == [("t1", "old")]

    assert s.commit("  new  ") is EditOutcome.UPDATED
    assert s.phase is EditPhase.IDLE
    assert calls == [("update", "t1", "new")]
    assert surface.hidden == ["t1"]
    assert s.commit("again") is EditOutcome.IGNORED


def test_commit_empty_deletes() -> None:
    calls: list[tuple] = []
    s = _session(FakeSurface(), calls)
    s.begin("text")
    assert s.commit("   ") is EditOutcome.DELETED
    assert calls == [("delete", "t1")]


def test_commit_unchanged_is_noop() -> None:
    calls: list[tuple] = []
    s = _session(FakeSurface(), calls)
    s.begin("same")
    assert s.commit(" same ") is EditOutcome.UNCHANGED
    assert calls == []


def test_cancel_restores_without_mutation() -> None:
    surface = FakeSurface()
    calls: list[tuple] = []
    s = _session(surface, calls)
    s.begin("text")
    s.set_value("something else")
    assert s.cancel() is EditOutcome.CANCELLED
    assert calls == []
    assert surface.hidden == ["t1"]
    assert s.cancel() is EditOutcome.IGNORED


def test_blur_commits_current_field_value() -> None:
    calls: list[tuple] = []
    s = _session(FakeSurface(), calls)
    s.begin("text")
    s.set_value("typed")
    assert s.commit() is EditOutcome.UPDATED
    assert calls == [("update", "t1", "typed")]


def test_begin_requires_visible_node() -> None:
    s = _session(FakeSurface(visible=False), [])
    assert s.begin("text") is False
    assert s.phase is EditPhase.IDLE


def test_inline_edit_updates_store_and_view(state: AppState, kv: MemoryKeyValueStore) -> None:
    actions.hydrate(state)
    task = actions.add_task(state, "draft")
    assert task is not None

    assert actions.begin_edit(state, task.id) is True
    assert actions.begin_edit(state, task.id) is False
    node = state.view.nodes[0]
    assert node.editing is True and node.edit_value == "draft"

    assert actions.commit_edit(state, task.id, "final") is EditOutcome.UPDATED
    assert state.store.get(task.id).text == "final"
    assert node.editing is False
    assert node.text == "final"
    assert task.id not in state.editor


def test_inline_edit_cleared_out_deletes(state: AppState) -> None:
    actions.hydrate(state)
    task = actions.add_task(state, "delete me")
    actions.begin_edit(state, task.id)

    assert actions.commit_edit(state, task.id, "") is EditOutcome.DELETED
    assert state.store.get(task.id) is None
    assert state.view.nodes == []


def test_unchanged_commit_does_not_write(state: AppState, kv: MemoryKeyValueStore) -> None:
    actions.hydrate(state)
    task = actions.add_task(state, "same")
    actions.begin_edit(state, task.id)
    writes = len(kv.writes)

    assert actions.commit_edit(state, task.id) is EditOutcome.UNCHANGED
    assert len(kv.writes) == writes


def test_cancel_keeps_text(state: AppState) -> None:
    actions.hydrate(state)
    task = actions.add_task(state, "keep")
    actions.begin_edit(state, task.id)
    state.editor.get(task.id).set_value("changed")

    assert actions.cancel_edit(state, task.id) is EditOutcome.CANCELLED
    assert state.store.get(task.id).text == "keep"
    assert state.view.nodes[0].editing is False
    assert state.view.nodes[0].text == "keep"


def test_cannot_edit_hidden_task(state: AppState) -> None:
    task = actions.add_task(state, "hidden")
    actions.toggle_task(state, task.id)
    actions.set_filter(state, FilterMode.ACTIVE)

    assert actions.begin_edit(state, task.id) is False


def test_filter_change_blurs_open_editor(state: AppState) -> None:
    actions.hydrate(state)
    task = actions.add_task(state, "before")
    actions.begin_edit(state, task.id)
    state.editor.get(task.id).set_value("after")

    actions.set_filter(state, FilterMode.ALL)

    assert state.editor.active_ids == []
    assert state.store.get(task.id).text == "after"
    assert state.view.nodes[0].editing is False


def test_toggle_out_of_filter_closes_its_editor(state: AppState) -> None:
    actions.set_filter(state, FilterMode.ACTIVE)
    task = actions.add_task(state, "finish me")
    assert actions.begin_edit(state, task.id) is True

    actions.toggle_task(state, task.id)

    assert not state.reconciler.is_visible(task.id)
    assert state.editor.active_ids == []
    assert actions.commit_edit(state, task.id, "late") is EditOutcome.IGNORED
    assert state.store.get(task.id).text == "finish me"


def test_rebuild_keeps_other_editor_attached(state: AppState) -> None:
    hidden = actions.add_task(state, "hidden")
    actions.toggle_task(state, hidden.id)
    actions.set_filter(state, FilterMode.ACTIVE)
    editing = actions.add_task(state, "editing")
    actions.begin_edit(state, editing.id)
    state.editor.get(editing.id).set_value("half typed")

    rebuilds = state.reconciler.rebuild_count
    actions.toggle_task(state, hidden.id)

    assert state.reconciler.rebuild_count == rebuilds + 1
    assert state.editor.active_ids == [editing.id]
    node = next(n for n in state.view.nodes if n.task_id == editing.id)
    assert node.editing is True
    assert node.edit_value == "half typed"

    assert actions.commit_edit(state, editing.id) is EditOutcome.UPDATED
    assert state.store.get(editing.id).text == "half typed"
    assert node.editing is False


def test_discarded_session_returns_to_idle() -> None:
    surface = FakeSurface()
    sessions = EditSessions(
        surface,
        lambda tid: Task(id=tid, text="text"),
        on_update=lambda tid, text: None,
        on_delete=lambda tid: None,
    )
    sessions.begin("t1")
    session = sessions.get("t1")

    surface.visible = False
    assert sessions.refresh() == ["t1"]
    assert "t1" not in sessions
    assert session.phase is EditPhase.IDLE
