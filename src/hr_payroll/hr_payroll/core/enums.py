from __future__ import annotations

from enum import Enum
from typing import Optional


class EventType(str, Enum):
    """Calendar event types known to the working-day resolver."""

    HOLIDAY = "holiday"
    WORKING_DAY = "working_day"
    HALF_DAY = "half_day"
    OFF_DAY = "off_day"
    MEETING = "meeting"
    TRAINING = "training"

    @classmethod
    def parse(cls, value: str) -> Optional["EventType"]:
        """Return the member for ``value`` or None for types we don't know."""
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


class AttendanceStatus(str, Enum):
    """Attendance marks persisted in the store."""

    PRESENT = "present"
    SHORT_LEAVE = "short_leave"
    LEAVE = "leave"


# UI placeholder for "no mark yet"; never persisted.
NOT_SET = "not_set"


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class DivisorPolicy(str, Enum):
    """Where the daily-rate divisor comes from for a company."""

    DYNAMIC_CALENDAR = "dynamic_calendar"
    FIXED_DIVISOR = "fixed_divisor"


class DayKind(str, Enum):
    """Outcome of resolving a single calendar date."""

    WORKING = "working"
    HALF_DAY = "half_day"
    PAID_HOLIDAY = "paid_holiday"
    OFF_DAY = "off_day"
    NON_WORKING = "non_working"
