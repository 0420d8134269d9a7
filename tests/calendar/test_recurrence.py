from datetime import date

import pytest

from hr_payroll.calendar.recurrence import (
    MAX_OCCURRENCES,
    RecurrenceKind,
    RecurrencePattern,
    expand_recurrence,
)
from hr_payroll.core.exceptions import ValidationError


def test_daily_with_interval():
    pattern = RecurrencePattern(kind=RecurrenceKind.DAILY, interval=3)

    dates = expand_recurrence(pattern, date(2026, 6, 1), date(2026, 6, 10))

    assert dates == [date(2026, 6, 1), date(2026, 6, 4), date(2026, 6, 7), date(2026, 6, 10)]


def test_weekly_on_listed_weekdays():
    # Mondays and Fridays, starting Wednesday 2026-06-03
    pattern = RecurrencePattern(kind=RecurrenceKind.WEEKLY, days_of_week=(0, 4))

    dates = expand_recurrence(pattern, date(2026, 6, 3), date(2026, 6, 15))

    assert dates == [date(2026, 6, 5), date(2026, 6, 8), date(2026, 6, 12), date(2026, 6, 15)]


def test_biweekly_without_weekdays_repeats_start_weekday():
    pattern = RecurrencePattern(kind=RecurrenceKind.WEEKLY, interval=2)

    dates = expand_recurrence(pattern, date(2026, 6, 1), date(2026, 6, 30))

    assert dates == [date(2026, 6, 1), date(2026, 6, 15), date(2026, 6, 29)]


def test_monthly_clamps_to_last_day_of_shorter_months():
    pattern = RecurrencePattern(kind=RecurrenceKind.MONTHLY)

    dates = expand_recurrence(pattern, date(2026, 1, 31), date(2026, 5, 31))

    assert dates == [date(2026, 1, 31), date(2026, 2, 28), date(2026, 3, 31), date(2026, 4, 30), date(2026, 5, 31)]


def test_yearly_from_leap_day_falls_back_to_february_28():
    pattern = RecurrencePattern(kind=RecurrenceKind.YEARLY)

    dates = expand_recurrence(pattern, date(2028, 2, 29), date(2030, 12, 31))

    assert dates == [date(2028, 2, 29), date(2029, 2, 28), date(2030, 2, 28)]


def test_open_ended_series_runs_for_one_year():
    pattern = RecurrencePattern(kind=RecurrenceKind.MONTHLY)

    dates = expand_recurrence(pattern, date(2026, 6, 15))

    assert dates[0] == date(2026, 6, 15)
    assert dates[-1] == date(2027, 6, 15)
    assert len(dates) == 13


def test_daily_series_is_capped():
    pattern = RecurrencePattern(kind=RecurrenceKind.DAILY)

    dates = expand_recurrence(pattern, date(2026, 1, 1), date(2030, 1, 1))

    assert len(dates) == MAX_OCCURRENCES == 365
    assert dates[-1] == date(2026, 12, 31)


def test_yearly_stops_at_end_date():
    pattern = RecurrencePattern(kind=RecurrenceKind.YEARLY, end_date=date(2028, 1, 1))

    dates = expand_recurrence(pattern, date(2026, 8, 14), date(2030, 12, 31))

    assert dates == [date(2026, 8, 14), date(2027, 8, 14)]


def test_invalid_interval_is_rejected():
    with pytest.raises(ValidationError):
        expand_recurrence(RecurrencePattern(kind=RecurrenceKind.DAILY, interval=0), date(2026, 1, 1), date(2026, 2, 1))


def test_invalid_weekday_is_rejected():
    pattern = RecurrencePattern(kind=RecurrenceKind.WEEKLY, days_of_week=(7,))

    with pytest.raises(ValidationError):
        expand_recurrence(pattern, date(2026, 1, 1), date(2026, 2, 1))
