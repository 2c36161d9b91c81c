# src/todo_countdown/core/theme.py

from __future__ import annotations

import logging

from ..tasks.persistence import TaskPersistence
from ..tasks.task_models import ThemeMode

logger = logging.getLogger(__name__)


class ThemePreference:
    """Persisted light/dark preference. Independent of tasks; loaded once at startup."""

    def __init__(self, persistence: TaskPersistence, default: ThemeMode | str = ThemeMode.LIGHT) -> None:
        self._persistence = persistence
        self.mode = persistence.load_theme(ThemeMode.parse(default))

    def set(self, mode: ThemeMode | str) -> ThemeMode:
        parsed = ThemeMode.parse(mode, self.mode)
        self._persistence.save_theme(parsed)
        self.mode = parsed
        logger.debug("Theme set to %s", self.mode.value)
        return self.mode

    def toggle(self) -> ThemeMode:
        return self.set(self.mode.flipped())
