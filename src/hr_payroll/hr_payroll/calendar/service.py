from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from typing import Optional

from ..cache.data_cache import DataCache, cache_key, scope_pattern
from ..common.datetime_utils import iter_month_days, month_end, month_key, month_start
from ..common.validators import require_non_empty, require_non_negative, require_positive
from ..core.constants import CALENDAR_CACHE_TTL_SECONDS, DEFAULT_SALARY_DIVISOR
from ..core.enums import EventType
from ..core.exceptions import ConflictError
from .holidays import HolidayPlan, find_duplicates, plan_holidays
from .model import (
    CompanyWorkingSettings,
    DayClassification,
    Event,
    MonthCalendar,
    MonthlyWorkingDaysOverride,
    WorkingDayConfig,
)
from .repository import CalendarRepository
from .rules import classify_day

logger = logging.getLogger(__name__)


class WorkingDayCalendar:
    """Resolves working days from the weekly pattern plus dated events.

    A month is resolved with a single ranged event query and memoised in the
    calendar's own cache; callers that write events or config must call
    ``invalidate``.
    """

    def __init__(
        self,
        calendar: CalendarRepository,
        *,
        cache: Optional[DataCache] = None,
        cache_ttl: float = CALENDAR_CACHE_TTL_SECONDS,
    ):
        self._calendar = calendar
        self._cache = cache if cache is not None else DataCache(default_ttl=cache_ttl, name="calendar")
        self._cache_ttl = float(cache_ttl)

    def get_config(self, company_id: str) -> WorkingDayConfig:
        # Missing row means the documented Mon-Fri default; nothing is written back.
        config = self._calendar.get_working_days_config(company_id)
        return config or WorkingDayConfig.default(company_id)

    def get_settings(self, company_id: str) -> CompanyWorkingSettings:
        settings = self._calendar.get_company_settings(company_id)
        return settings or CompanyWorkingSettings.default(company_id)

    def events_for_date(self, day: date, company_id: str) -> list[Event]:
        return list(self._calendar.list_events(company_id, day, day))

    def month(self, month: date, company_id: str) -> MonthCalendar:
        company_id = require_non_empty(company_id, "company_id")
        key = cache_key("calendar", company_id, month_key(month))
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        config = self.get_config(company_id)
        start, end = month_start(month), month_end(month)
        by_date: dict[date, list[Event]] = defaultdict(list)
        for e in self._calendar.list_events(company_id, start, end):
            by_date[e.event_date].append(e)

        resolved = MonthCalendar(
            company_id=company_id,
            month=start,
            days=tuple(classify_day(d, config, by_date.get(d, ())) for d in iter_month_days(start)),
        )
        logger.debug(
            "resolved calendar company=%s month=%s working_days=%s",
            company_id, month_key(start), resolved.working_days,
        )
        self._cache.set(key, resolved, self._cache_ttl)
        return resolved

    def classify_day(self, day: date, company_id: str) -> DayClassification:
        return self.month(day, company_id).get(day)

    def is_working_day(self, day: date, company_id: str) -> bool:
        return self.classify_day(day, company_id).is_working

    def should_show_attendance(self, day: date, company_id: str) -> bool:
        return self.classify_day(day, company_id).show_attendance

    def has_holiday(self, day: date, company_id: str) -> bool:
        return self.classify_day(day, company_id).is_holiday

    def working_days_in_month(self, month: date, company_id: str) -> float:
        return self.month(month, company_id).working_days

    def working_dates_in_month(self, month: date, company_id: str) -> list[date]:
        return self.month(month, company_id).working_dates

    def invalidate(self, company_id: Optional[str] = None, month: Optional[date] = None) -> None:
        if company_id is None:
            self._cache.invalidate()
            return
        self._cache.invalidate(scope_pattern(company_id, month_key(month) if month else None))


class MonthlyOverrideService:
    """Explicit per-month working-day count and divisor for a company."""

    def __init__(
        self,
        calendar: CalendarRepository,
        working_days: WorkingDayCalendar,
        *,
        report_cache: Optional[DataCache] = None,
    ):
        self._calendar = calendar
        self._working_days = working_days
        self._report_cache = report_cache

    def get(self, company_id: str, month: date) -> Optional[MonthlyWorkingDaysOverride]:
        return self._calendar.get_monthly_override(company_id, month_start(month))

    def save(
        self,
        *,
        company_id: str,
        month: date,
        working_days_count: float,
        daily_rate_divisor: float = DEFAULT_SALARY_DIVISOR,
    ) -> MonthlyWorkingDaysOverride:
        override = MonthlyWorkingDaysOverride(
            company_id=require_non_empty(company_id, "company_id"),
            month=month_start(month),
            working_days_count=require_non_negative(working_days_count, "working_days_count"),
            daily_rate_divisor=require_positive(daily_rate_divisor, "daily_rate_divisor"),
        )
        self._calendar.upsert_monthly_override(override)
        logger.info(
            "saved monthly override company=%s month=%s working_days=%s divisor=%s",
            override.company_id, month_key(override.month),
            override.working_days_count, override.daily_rate_divisor,
        )

        self._working_days.invalidate(override.company_id, override.month)
        if self._report_cache is not None:
            self._report_cache.invalidate(scope_pattern(override.company_id, month_key(override.month)))
        return override


class HolidayImportService:
    """Imports and removes a country's national holidays for one year.

    Lunar-calendar holidays have no derivable date and are reported as
    unresolved instead of being stored.
    """

    def __init__(
        self,
        calendar: CalendarRepository,
        working_days: WorkingDayCalendar,
        *,
        report_cache: Optional[DataCache] = None,
    ):
        self._calendar = calendar
        self._working_days = working_days
        self._report_cache = report_cache

    def _existing(self, company_id: str, year: int) -> list[Event]:
        return list(self._calendar.list_events(company_id, date(year, 1, 1), date(year, 12, 31)))

    def preview(self, company_id: str, country: str, year: int) -> tuple[HolidayPlan, list[str]]:
        company_id = require_non_empty(company_id, "company_id")
        plan = plan_holidays(country, year)
        return plan, find_duplicates(plan, self._existing(company_id, plan.year))

    def import_holidays(self, company_id: str, country: str, year: int) -> list[Event]:
        plan, duplicates = self.preview(company_id, country, year)
        if duplicates:
            raise ConflictError(
                f"{len(duplicates)} {plan.country} holidays already exist for {plan.year}: {', '.join(duplicates)}"
            )

        events = [
            Event(
                event_id="",
                company_id=company_id,
                title=name,
                event_date=day,
                event_type=EventType.HOLIDAY.value,
                affects_attendance=True,
                description=f"{plan.country} national holiday",
            )
            for name, day in plan.holidays
        ]
        stored = self._calendar.insert_events(events)
        logger.info(
            "imported holidays company=%s country=%s year=%s count=%d unresolved=%d",
            company_id, plan.country, plan.year, len(stored), len(plan.unresolved),
        )
        self._invalidate(company_id, plan.year)
        return stored

    def remove_holidays(self, company_id: str, country: str, year: int) -> int:
        company_id = require_non_empty(company_id, "company_id")
        plan = plan_holidays(country, year)
        removed = self._calendar.delete_events(
            company_id,
            EventType.HOLIDAY.value,
            plan.names,
            date(plan.year, 1, 1),
            date(plan.year, 12, 31),
        )
        logger.info(
            "removed holidays company=%s country=%s year=%s count=%d",
            company_id, plan.country, plan.year, removed,
        )
        self._invalidate(company_id, plan.year)
        return removed

    def _invalidate(self, company_id: str, year: int) -> None:
        # Report keys end in YYYY-MM, so the bare year matches all twelve months.
        self._working_days.invalidate(company_id)
        if self._report_cache is not None:
            self._report_cache.invalidate(scope_pattern(company_id, str(year)))
