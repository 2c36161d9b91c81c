# src/todo_countdown/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs the console REPL on an
asyncio event loop (the countdown tick shares that loop).
"""

from __future__ import annotations

import asyncio
import logging
import signal

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import TICK_LOGGER, setup_logging

logger = logging.getLogger(__name__)


def _shutdown(state) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    # Every mutation is already on disk and the key/value store holds no open
    # connection, so only the tick needs stopping.
    try:
        state.ticker.stop()
    except Exception:
        logger.debug("Countdown tick stop failed.", exc_info=True)


def _handle_sigterm(signum, _frame) -> None:
    logger.info("Signal %s received, shutting down...", signum)
    raise KeyboardInterrupt


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)

    log_dir = getattr(settings, "data_dir", ".local/todo")
    quiet = (TICK_LOGGER,) if getattr(settings, "quiet_tick_logs", True) else ()
    setup_logging(log_dir=log_dir, console_level=console_level, quiet_loggers=quiet)

    logger.info("Starting %s...", getattr(settings, "app_name", "todo"))

    # IMPORTANT: reuse same settings object
    state = create_initial_state(settings=settings)
    if state.store.recovered:
        print("[WARN] Stored tasks were damaged; unreadable entries were dropped.")

    try:
        signal.signal(signal.SIGTERM, _handle_sigterm)
    except (ValueError, OSError, AttributeError):
        # Some platforms may not support SIGTERM.
        pass

    try:
        asyncio.run(run_console_loop(state))
    except KeyboardInterrupt:
        print("\nInterrupted. Goodbye.")
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
