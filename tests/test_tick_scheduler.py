# tests/test_tick_scheduler.py

from __future__ import annotations

import asyncio
from datetime import datetime

import pytest

from todo_countdown.view.tick_scheduler import TickScheduler


class FakePainter:
    def __init__(self, fail: bool = False) -> None:
        self.calls: list[datetime | None] = []
        self.fail = fail

    def repaint_countdowns(self, now: datetime | None = None) -> int:
        self.calls.append(now)
        if self.fail:
            raise RuntimeError("boom")
        return 1


@pytest.mark.asyncio
async def test_ticks_repeat_until_stopped() -> None:
    painter = FakePainter()
    ticker = TickScheduler(painter, interval_seconds=0.01)

    assert ticker.start() is True
    await asyncio.sleep(0.08)
    ticker.stop()
    assert ticker.running is False

    count = len(painter.calls)
    assert count >= 2
    await asyncio.sleep(0.05)
    assert len(painter.calls) == count, "no callback may fire after stop()"


@pytest.mark.asyncio
async def test_start_is_idempotent() -> None:
    ticker = TickScheduler(FakePainter(), interval_seconds=0.01)
    assert ticker.start() is True
    assert ticker.start() is False
    await ticker.aclose()
    assert ticker.running is False
    assert ticker.start() is True
    await ticker.aclose()


@pytest.mark.asyncio
async def test_failing_tick_does_not_kill_the_loop() -> None:
    painter = FakePainter(fail=True)
    ticker = TickScheduler(painter, interval_seconds=0.01)
    ticker.start()
    await asyncio.sleep(0.06)
    assert ticker.running is True
    await ticker.aclose()
    assert len(painter.calls) >= 2
    assert ticker.ticks == 0


def test_single_tick_uses_clock() -> None:
    fixed = datetime(2030, 1, 1, 9, 0, 0)
    painter = FakePainter()
    ticker = TickScheduler(painter, clock=lambda: fixed)
    assert ticker.tick() == 1
    assert painter.calls == [fixed]
    assert ticker.ticks == 1


def test_stop_without_start_is_harmless() -> None:
    ticker = TickScheduler(FakePainter())
    ticker.stop()
    assert ticker.running is False
