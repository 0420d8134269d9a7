from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.constants import (
    DEFAULT_SALARY_DIVISOR,
    DEFAULT_WORKING_DAYS_PER_MONTH,
    DEFAULT_WORKING_DAYS_PER_WEEK,
)
from ..core.enums import DayKind, DivisorPolicy, EventType

_WEEKDAY_FIELDS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


@dataclass(frozen=True)
class WorkingDayConfig:
    """Weekly pattern: which weekdays are working days by default."""

    company_id: str
    monday: bool = True
    tuesday: bool = True
    wednesday: bool = True
    thursday: bool = True
    friday: bool = True
    saturday: bool = False
    sunday: bool = False

    @classmethod
    def default(cls, company_id: str) -> "WorkingDayConfig":
        return cls(company_id=company_id)

    def is_working_weekday(self, day: date) -> bool:
        return bool(getattr(self, _WEEKDAY_FIELDS[day.weekday()]))


@dataclass(frozen=True)
class CompanyWorkingSettings:
    company_id: str
    default_working_days_per_week: int = DEFAULT_WORKING_DAYS_PER_WEEK
    default_working_days_per_month: int = DEFAULT_WORKING_DAYS_PER_MONTH
    salary_divisor: int = DEFAULT_SALARY_DIVISOR
    weekend_saturday: bool = False
    weekend_sunday: bool = True
    divisor_policy: DivisorPolicy = DivisorPolicy.DYNAMIC_CALENDAR

    @classmethod
    def default(cls, company_id: str) -> "CompanyWorkingSettings":
        return cls(company_id=company_id)


@dataclass(frozen=True)
class Event:
    """Calendar entry. ``event_type`` keeps the raw stored value."""

    event_id: str
    company_id: str
    title: str
    event_date: date
    event_type: str
    affects_attendance: bool = True
    description: Optional[str] = None

    @property
    def known_type(self) -> Optional[EventType]:
        return EventType.parse(self.event_type)


@dataclass(frozen=True)
class MonthlyWorkingDaysOverride:
    company_id: str
    month: date
    working_days_count: float
    daily_rate_divisor: float = DEFAULT_SALARY_DIVISOR


@dataclass(frozen=True)
class DayClassification:
    """Resolved view of one date: what kind of day it is and what it pays."""

    day: date
    kind: DayKind
    credit: float
    show_attendance: bool
    events: tuple[Event, ...] = field(default_factory=tuple)

    @property
    def is_working(self) -> bool:
        return self.kind in (DayKind.WORKING, DayKind.HALF_DAY)

    @property
    def is_holiday(self) -> bool:
        return self.kind == DayKind.PAID_HOLIDAY


@dataclass(frozen=True)
class MonthCalendar:
    company_id: str
    month: date
    days: tuple[DayClassification, ...]

    @property
    def working_days(self) -> float:
        return sum(d.credit for d in self.days)

    @property
    def working_dates(self) -> list[date]:
        return [d.day for d in self.days if d.is_working]

    def get(self, day: date) -> DayClassification:
        if (day.year, day.month) != (self.month.year, self.month.month):
            raise KeyError(day)
        return self.days[day.day - 1]
