# src/todo_countdown/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core import actions
from ..core.state import AppState
from ..tasks.task_models import FilterMode
from ..view.edit_session import EditOutcome

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

DUE_PREFIX = "due="


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def is_command(self, line: str, name: str) -> bool:
        """True if `line` invokes `name` (or one of its aliases)."""
        if not line.startswith("/"):
            return False
        parts = line[1:].split()
        if not parts:
            return False
        return self._handlers.get(parts[0].lower()) is self._handlers.get(name)

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Save and quit.")
        lines.append("Typing a line without a leading '/' adds it as a task.")
        return "\n".join(lines)


registry = CommandRegistry()


def split_due(args: list[str]) -> tuple[str, str | None]:
    """Pull a `due=YYYY-MM-DD` token out of the words; the rest is the text."""
    due: str | None = None
    words: list[str] = []
    for a in args:
        if a.lower().startswith(DUE_PREFIX):
            due = a[len(DUE_PREFIX):] or None
        else:
            words.append(a)
    return " ".join(words), due


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    text, due = split_due(args)
    task = actions.add_task(state, text, due)
    if task is None:
        return "Nothing to add (task text is empty)."
    return ""


def _resolve(state: AppState, args: list[str]) -> str | None:
    if not args:
        return None
    return actions.resolve_ref(state, args[0])


def cmd_toggle(state: AppState, args: list[str]) -> str:
    task_id = _resolve(state, args)
    if task_id is None:
        return "Usage: /toggle <number|id>"
    actions.toggle_task(state, task_id)
    return ""


def cmd_delete(state: AppState, args: list[str]) -> str:
    task_id = _resolve(state, args)
    if task_id is None:
        return "Usage: /del <number|id>"
    actions.delete_task(state, task_id)
    return ""


def cmd_edit(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /edit 2              -> open the inline editor for task #2
    /edit 2 new text     -> open and commit in one go
    """
    task_id = _resolve(state, args)
    if task_id is None:
        return "Usage: /edit <number|id> [new text]"

    if not actions.begin_edit(state, task_id):
        if task_id in state.editor:
            return "Already editing that task."
        return "That task is not visible."

    if len(args) > 1:
        actions.commit_edit(state, task_id, " ".join(args[1:]))
        return ""

    if emit:
        emit("Type the new text and press Enter. Empty text deletes the task, /cancel keeps it.")
    return ""


def cmd_cancel(state: AppState, args: list[str]) -> str:
    open_ids = state.editor.active_ids
    if not open_ids:
        return "No edit in progress."
    for task_id in open_ids:
        actions.cancel_edit(state, task_id)
    return ""


def cmd_filter(state: AppState, args: list[str]) -> str:
    if not args:
        return f"Filter is {state.store.filter.value}. Use /filter all|active|completed."
    applied = actions.set_filter(state, args[0])
    if applied.value != args[0].lower():
        return f"Unknown filter {args[0]!r}; showing {FilterMode.ALL.value}."
    return ""


def cmd_clear(state: AppState, args: list[str]) -> str:
    removed = actions.clear_completed(state)
    if not removed:
        return "No completed tasks to clear."
    return f"Removed {removed} completed task(s)."


def cmd_theme(state: AppState, args: list[str]) -> str:
    mode = actions.toggle_theme(state)
    return f"Theme: {mode.value}."


def cmd_list(state: AppState, args: list[str]) -> str:
    return ""


def commit_pending_edit(state: AppState, line: str) -> EditOutcome | None:
    """A plain line typed while an editor is open goes into that editor."""
    open_ids = state.editor.active_ids
    if not open_ids:
        return None
    return actions.commit_edit(state, open_ids[-1], line)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a task: /add <text> [due=YYYY-MM-DD].", aliases=["a"])
registry.register("toggle", cmd_toggle, help_text="Mark a task done/undone: /toggle <n>.", aliases=["t", "done"])
registry.register("del", cmd_delete, help_text="Delete a task: /del <n>.", aliases=["rm", "delete"])
registry.register("edit", cmd_edit, help_text="Edit a task's text: /edit <n> [new text].", aliases=["e"])
registry.register("cancel", cmd_cancel, help_text="Abort the current edit.", aliases=["esc"])
registry.register("filter", cmd_filter, help_text="Show all|active|completed tasks.", aliases=["f"])
registry.register("clear", cmd_clear, help_text="Remove all completed tasks.")
registry.register("theme", cmd_theme, help_text="Switch between light and dark theme.")
registry.register("list", cmd_list, help_text="Redraw the list.", aliases=["ls"])
