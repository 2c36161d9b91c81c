# src/todo_countdown/logging_setup.py

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from pathlib import Path

APP_LOGGER = "todo_countdown"
TICK_LOGGER = "todo_countdown.view.tick_scheduler"


class _ConsoleNoiseFilter(logging.Filter):
    """
    Console gate for an interactive terminal.

    App records pass, except for loggers listed as quiet (periodic background
    work), which only pass at WARNING+. Anything not from the app, captured
    `py.warnings` included, only passes at ERROR+.
    """

    def __init__(self, quiet_loggers: Iterable[str] = ()) -> None:
        super().__init__()
        self._quiet = tuple(quiet_loggers)

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name != APP_LOGGER and not name.startswith(APP_LOGGER + "."):
            return record.levelno >= logging.ERROR
        if name.startswith(self._quiet):
            return record.levelno >= logging.WARNING
        return True


def setup_logging(
    *,
    log_dir: str | Path = ".local/todo",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
    quiet_loggers: Iterable[str] = (TICK_LOGGER,),
) -> Path:
    """
    Route logs to stderr (filtered, so they do not bury the task list) and to
    <log_dir>/todo.log (unfiltered). Replaces any handlers already on the root
    logger; call once at startup. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "todo.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter(quiet_loggers))
    root.addHandler(console)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    logging.captureWarnings(True)
    return log_file
