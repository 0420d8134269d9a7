from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import CompanyWorkingSettings, Event, MonthlyWorkingDaysOverride, WorkingDayConfig


class CalendarRepository(Protocol):
    def get_working_days_config(self, company_id: str) -> Optional[WorkingDayConfig]:
        """Return the stored weekly pattern, or None when the company has none."""

        raise NotImplementedError

    def get_company_settings(self, company_id: str) -> Optional[CompanyWorkingSettings]:
        raise NotImplementedError

    def list_events(self, company_id: str, start: date, end: date) -> Sequence[Event]:
        """All events with ``start <= event_date <= end``."""

        raise NotImplementedError

    def get_monthly_override(self, company_id: str, month: date) -> Optional[MonthlyWorkingDaysOverride]:
        raise NotImplementedError

    def upsert_monthly_override(self, override: MonthlyWorkingDaysOverride) -> None:
        """Create or replace the row keyed by (company_id, month)."""

        raise NotImplementedError

    def insert_events(self, events: Sequence[Event]) -> list[Event]:
        """Store new events and return them carrying their assigned ids."""

        raise NotImplementedError

    def delete_events(self, company_id: str, event_type: str, titles: Sequence[str], start: date, end: date) -> int:
        """Delete events of ``event_type`` with one of ``titles`` dated within ``[start, end]``."""

        raise NotImplementedError
