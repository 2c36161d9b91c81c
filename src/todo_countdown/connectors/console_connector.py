# src/todo_countdown/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
import sys
import threading

from ..cli.commands import cmd_add, commit_pending_edit
from ..cli.commands import registry as command_registry
from ..core import actions
from ..core.state import AppState

logger = logging.getLogger(__name__)

_EOF = None


def _start_stdin_reader(loop: asyncio.AbstractEventLoop, queue: asyncio.Queue[str | None]) -> threading.Thread:
    """
    Read stdin lines in a daemon thread and hand them to the event loop.

    Only the blocking read happens off-loop; every line is handled on the loop,
    so commands and countdown ticks never run concurrently.
    """

    def _reader() -> None:
        while True:
            try:
                line = sys.stdin.readline()
            except (OSError, ValueError):
                line = ""
            if not line:
                loop.call_soon_threadsafe(queue.put_nowait, _EOF)
                return
            loop.call_soon_threadsafe(queue.put_nowait, line.rstrip("\r\n"))

    t = threading.Thread(target=_reader, name="stdin-reader", daemon=True)
    t.start()
    return t


def _header(state: AppState) -> str:
    app_name = str(getattr(state.settings, "app_name", "todo"))
    return f"== {app_name} | filter: {state.store.filter.value} | theme: {state.theme.mode.value} =="


def render(state: AppState) -> str:
    return "\n".join(state.view.render(header=_header(state)))


def _prompt(state: AppState) -> str:
    return "edit> " if state.editor.active_ids else "> "


def handle_line(state: AppState, line: str) -> str | None:
    """
    Route one input line.

    - while an editor is open, a plain line (even an empty one) commits it
    - a slash command first commits open editors (focus left the field),
      except /cancel which aborts them
    - any other non-empty line is added as a task
    """
    if state.editor.active_ids and not line.startswith("/"):
        commit_pending_edit(state, line)
        return None

    if not line:
        return None

    if line.startswith("/"):
        if not command_registry.is_command(line, "cancel"):
            actions.blur_edits(state)
        return command_registry.handle(state, line, emit=lambda text: print(text, flush=True))

    return cmd_add(state, line.split()) or None


async def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")
    print("Type a task and press Enter to add it. Use /help for commands, /exit to quit.\n")

    loop = asyncio.get_running_loop()
    queue: asyncio.Queue[str | None] = asyncio.Queue()
    _start_stdin_reader(loop, queue)

    actions.hydrate(state)
    state.ticker.start()

    try:
        print(render(state), flush=True)
        state.view.settle()

        while True:
            print(_prompt(state), end="", flush=True)
            raw = await queue.get()
            if raw is _EOF:
                logger.info("Console EOF received, exiting.")
                print()
                break

            line = raw.strip()
            if line.lower() in ("/exit", "/quit"):
                actions.blur_edits(state)
                logger.info("Console exit command received.")
                break

            try:
                response = handle_line(state, line)
            except Exception:
                logger.exception("Command handler crashed.")
                response = "Internal error while handling a command."

            print(render(state))
            if response:
                print(response)
            print(flush=True)
            state.view.settle()
    finally:
        await state.ticker.aclose()
        state.reconciler.teardown()
        logger.info("Console connector finished.")
