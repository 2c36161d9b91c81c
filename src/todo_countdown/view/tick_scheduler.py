# src/todo_countdown/view/tick_scheduler.py

from __future__ import annotations

"""
Countdown tick.

A small periodic loop on the running asyncio event loop that repaints the
countdown fragment of every visible node. It reads the store, never writes
it, and runs on the same loop as user commands, so a tick and a mutation
cannot interleave mid-step.
"""

import asyncio
import contextlib
import logging
from collections.abc import Callable
from datetime import datetime
from typing import Protocol

logger = logging.getLogger(__name__)


class CountdownPainter(Protocol):
    def repaint_countdowns(self, now: datetime | None = None) -> int: ...


class TickScheduler:
    def __init__(
        self,
        painter: CountdownPainter,
        *,
        interval_seconds: float = 1.0,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._painter = painter
        self._interval = max(0.01, float(interval_seconds))
        self._clock = clock
        self._task: asyncio.Task[None] | None = None
        self.ticks = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def tick(self, now: datetime | None = None) -> int:
        """One repaint pass. A failing pass is logged, never raised."""
        try:
            painted = self._painter.repaint_countdowns(now or self._clock())
        except Exception:
            logger.exception("countdown repaint failed")
            return 0
        self.ticks += 1
        return painted

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            self.tick()

    def start(self) -> bool:
        """Start ticking on the running loop. Returns False if already running."""
        if self.running:
            return False
        self._task = asyncio.get_running_loop().create_task(self._run(), name="countdown-tick")
        logger.debug("Countdown tick started interval=%.2fs", self._interval)
        return True

    def stop(self) -> None:
        """Cancel the loop; nothing stays scheduled afterwards."""
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            logger.debug("Countdown tick stopped after %d ticks", self.ticks)

    async def aclose(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
