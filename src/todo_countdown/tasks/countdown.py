# src/todo_countdown/tasks/countdown.py

"""
Countdown formatting for task due dates.

A due date is a plain calendar date ("YYYY-MM-DD") and means the end of that
day (23:59:59 local time). Anything that does not parse is displayed as if the
task had no due date; the stored value is never touched here.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime, time

NO_DEADLINE_LABEL = "Time left: —"
OVERDUE_LABEL = "Deadline has passed!"
NO_DUE_DATE_LABEL = "No due date"

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_END_OF_DAY = time(23, 59, 59)


@dataclass(frozen=True, slots=True)
class Countdown:
    label: str
    is_overdue: bool
    remaining_seconds: int | None = None


def parse_due_end_of_day(raw: str | None) -> datetime | None:
    if not raw:
        return None
    s = raw.strip()
    if not _DATE_RE.match(s):
        return None
    try:
        day = date.fromisoformat(s)
    except ValueError:
        return None
    return datetime.combine(day, _END_OF_DAY)


def _local_naive(now: datetime) -> datetime:
    if now.tzinfo is None:
        return now
    return now.astimezone().replace(tzinfo=None)


def format_countdown(due_date: str | None, now: datetime | None = None) -> Countdown:
    deadline = parse_due_end_of_day(due_date)
    if deadline is None:
        return Countdown(NO_DEADLINE_LABEL, False)

    current = _local_naive(now) if now is not None else datetime.now()
    diff = (deadline - current).total_seconds()
    if diff < 0:
        return Countdown(OVERDUE_LABEL, True)

    total = math.floor(diff)
    days = total // 86400
    hours = (total % 86400) // 3600
    minutes = (total % 3600) // 60
    return Countdown(
        f"Time left: {days} days, {hours} hours, {minutes} min",
        False,
        remaining_seconds=total,
    )


def due_label(due_date: str | None) -> str:
    return f"Due: {due_date}" if due_date else NO_DUE_DATE_LABEL
