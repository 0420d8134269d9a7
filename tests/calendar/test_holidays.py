from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from hr_payroll.cache.data_cache import DataCache
from hr_payroll.calendar.holidays import easter_sunday, find_duplicates, plan_holidays
from hr_payroll.calendar.model import Event
from hr_payroll.calendar.service import HolidayImportService, WorkingDayCalendar
from hr_payroll.core.exceptions import ConflictError, ValidationError


class InMemoryEvents:
    def __init__(self, events=()):
        self.events = list(events)
        self.next_id = 100

    def get_working_days_config(self, company_id):
        return None

    def get_company_settings(self, company_id):
        return None

    def list_events(self, company_id, start, end):
        return [e for e in self.events if e.company_id == company_id and start <= e.event_date <= end]

    def get_monthly_override(self, company_id, month):
        return None

    def upsert_monthly_override(self, override):
        pass

    def insert_events(self, events):
        stored = []
        for e in events:
            self.next_id += 1
            stored.append(replace(e, event_id=str(self.next_id)))
        self.events.extend(stored)
        return stored

    def delete_events(self, company_id, event_type, titles, start, end):
        keep = [
            e for e in self.events
            if not (
                e.company_id == company_id
                and e.event_type == event_type
                and e.title in titles
                and start <= e.event_date <= end
            )
        ]
        removed = len(self.events) - len(keep)
        self.events = keep
        return removed


def holiday(title: str, day: date, company_id: str = "c1") -> Event:
    return Event(f"{company_id}-{title}-{day}", company_id, title, day, "holiday")


def build(events=()):
    repo = InMemoryEvents(events)
    report_cache = DataCache()
    calendar = WorkingDayCalendar(repo)
    return HolidayImportService(repo, calendar, report_cache=report_cache), repo, calendar, report_cache


def test_easter_dates():
    assert easter_sunday(2026) == date(2026, 4, 5)
    assert easter_sunday(2027) == date(2027, 3, 28)


def test_uk_plan_resolves_easter_relative_holidays():
    plan = plan_holidays("uk", 2026)

    assert plan.country == "UK"
    assert dict(plan.holidays) == {
        "New Year's Day": date(2026, 1, 1),
        "Good Friday": date(2026, 4, 3),
        "Easter Monday": date(2026, 4, 6),
        "Christmas Day": date(2026, 12, 25),
        "Boxing Day": date(2026, 12, 26),
    }
    assert plan.unresolved == ()


def test_us_thanksgiving_is_fourth_thursday_of_november():
    plan = plan_holidays("US", 2026)

    assert dict(plan.holidays)["Thanksgiving"] == date(2026, 11, 26)


def test_lunar_holidays_are_left_unresolved():
    plan = plan_holidays("PK", 2026)

    assert len(plan.holidays) == 7
    assert "Eid-ul-Fitr" in plan.unresolved
    assert len(plan.names) == 14


def test_unknown_country_is_rejected():
    with pytest.raises(ValidationError):
        plan_holidays("XX", 2026)


def test_duplicates_match_by_date_or_title_within_the_year():
    plan = plan_holidays("CA", 2026)
    existing = [
        holiday("Company Anniversary", date(2026, 7, 1)),
        holiday("Boxing Day", date(2026, 12, 28)),
        holiday("Christmas Day", date(2025, 12, 25)),
        Event("m1", "c1", "New Year's Day", date(2026, 1, 1), "meeting"),
    ]

    assert find_duplicates(plan, existing) == ["Canada Day", "Boxing Day"]


def test_import_stores_resolved_holidays_as_attendance_events():
    svc, repo, calendar, _ = build()

    stored = svc.import_holidays("c1", "US", 2026)

    assert [e.title for e in stored] == ["New Year's Day", "Independence Day", "Christmas Day", "Thanksgiving"]
    assert all(e.event_type == "holiday" and e.affects_attendance for e in stored)
    assert all(e.event_id for e in stored)
    assert calendar.has_holiday(date(2026, 11, 26), "c1") is True


def test_import_refuses_when_any_holiday_already_exists():
    svc, repo, _, _ = build([holiday("Christmas Day", date(2026, 12, 25))])

    with pytest.raises(ConflictError):
        svc.import_holidays("c1", "US", 2026)

    assert len(repo.events) == 1


def test_preview_lists_duplicates_without_writing():
    svc, repo, _, _ = build([holiday("Independence Day", date(2026, 7, 4))])

    plan, duplicates = svc.preview("c1", "US", 2026)

    assert duplicates == ["Independence Day"]
    assert len(plan.holidays) == 4
    assert len(repo.events) == 1


def test_import_refreshes_cached_calendar_and_reports_for_that_year():
    svc, _, calendar, report_cache = build()
    assert calendar.working_days_in_month(date(2026, 12, 1), "c1") == 23
    report_cache.set("report:c1:2026-12", "stale")
    report_cache.set("report:c1:2027-01", "keep")

    svc.import_holidays("c1", "UK", 2026)

    # Christmas and Boxing Day 2026 fall on Friday and Saturday.
    assert calendar.working_days_in_month(date(2026, 12, 1), "c1") == 24
    assert report_cache.get("report:c1:2026-12") is None
    assert report_cache.get("report:c1:2027-01") == "keep"


def test_remove_deletes_only_that_country_and_year():
    events = [
        holiday("Christmas Day", date(2026, 12, 25)),
        holiday("Thanksgiving", date(2026, 11, 26)),
        holiday("Christmas Day", date(2027, 12, 25)),
        holiday("Founders Day", date(2026, 3, 2)),
        holiday("Christmas Day", date(2026, 12, 25), company_id="c2"),
    ]
    svc, repo, _, _ = build(events)

    removed = svc.remove_holidays("c1", "US", 2026)

    assert removed == 2
    assert sorted((e.company_id, e.title, e.event_date.year) for e in repo.events) == [
        ("c1", "Christmas Day", 2027),
        ("c1", "Founders Day", 2026),
        ("c2", "Christmas Day", 2026),
    ]
