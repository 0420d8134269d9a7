from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Iterator, Optional

from ..core.exceptions import ValidationError

# Hard stop so an open-ended pattern can't loop forever.
MAX_OCCURRENCES = 365


class RecurrenceKind(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


@dataclass(frozen=True)
class RecurrencePattern:
    """How a recurring event repeats.

    ``days_of_week`` uses ``date.weekday()`` numbering (Monday=0) and only
    applies to weekly patterns.
    """

    kind: RecurrenceKind
    interval: int = 1
    days_of_week: tuple[int, ...] = ()
    end_date: Optional[date] = None


def _validate(pattern: RecurrencePattern) -> None:
    if int(pattern.interval) < 1:
        raise ValidationError("interval must be at least 1")
    for dow in pattern.days_of_week:
        if not 0 <= int(dow) <= 6:
            raise ValidationError(f"Invalid weekday: {dow}")


def add_months(day: date, months: int) -> date:
    """Shift by whole months, clamping to the last day of a shorter month (Jan 31 + 1 = Feb 28)."""
    total = day.month - 1 + months
    year, month = day.year + total // 12, total % 12 + 1
    return date(year, month, min(day.day, calendar.monthrange(year, month)[1]))


def _candidates(pattern: RecurrencePattern, start: date) -> Iterator[date]:
    step = int(pattern.interval)

    if pattern.kind == RecurrenceKind.DAILY:
        current = start
        while True:
            yield current
            current += timedelta(days=step)

    elif pattern.kind == RecurrenceKind.WEEKLY:
        if not pattern.days_of_week:
            current = start
            while True:
                yield current
                current += timedelta(weeks=step)
        week_start = start - timedelta(days=start.weekday())
        days = sorted({int(d) for d in pattern.days_of_week})
        while True:
            for dow in days:
                candidate = week_start + timedelta(days=dow)
                if candidate >= start:
                    yield candidate
            week_start += timedelta(weeks=step)

    elif pattern.kind == RecurrenceKind.MONTHLY:
        offset = 0
        while True:
            yield add_months(start, offset)
            offset += step

    elif pattern.kind == RecurrenceKind.YEARLY:
        offset = 0
        while True:
            yield add_months(start, offset * 12)
            offset += step

    else:
        raise ValidationError(f"Unsupported recurrence: {pattern.kind}")


def expand_recurrence(pattern: RecurrencePattern, start: date, until: Optional[date] = None) -> list[date]:
    """Return the occurrence dates of ``pattern`` from ``start`` up to ``until`` inclusive.

    Without ``until`` or a pattern end date the series runs for one year.
    """
    _validate(pattern)
    if until is None:
        until = pattern.end_date or add_months(start, 12)
    elif pattern.end_date is not None and pattern.end_date < until:
        until = pattern.end_date

    out: list[date] = []
    for candidate in _candidates(pattern, start):
        if candidate > until or len(out) >= MAX_OCCURRENCES:
            break
        out.append(candidate)
    return out
