from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid date: {value!r}") from exc


def parse_month(value: str) -> date:
    """Parse YYYY-MM (or YYYY-MM-DD) into the first day of that month."""
    raw = (value or "").strip()
    for fmt in ("%Y-%m", "%Y-%m-%d"):
        try:
            return month_start(datetime.strptime(raw, fmt).date())
        except ValueError:
            continue
    raise ValidationError(f"Invalid month: {value!r}")


def month_start(day: date) -> date:
    return day.replace(day=1)


def month_end(day: date) -> date:
    return day.replace(day=calendar.monthrange(day.year, day.month)[1])


def month_key(day: date) -> str:
    return day.strftime("%Y-%m")


def iter_month_days(month: date) -> Iterator[date]:
    """Yield every calendar day of the month containing ``month``."""
    current = month_start(month)
    last = month_end(month)
    while current <= last:
        yield current
        current += timedelta(days=1)
