from datetime import date

from hr_payroll.calendar.model import Event, WorkingDayConfig
from hr_payroll.calendar.rules import classify_day
from hr_payroll.core.enums import DayKind

MON_FRI = WorkingDayConfig.default("c1")
WEDNESDAY = date(2026, 6, 3)
SATURDAY = date(2026, 6, 6)
SUNDAY = date(2026, 6, 7)


def ev(day: date, event_type: str, *, affects: bool = True) -> Event:
    return Event(
        event_id=f"{day.isoformat()}-{event_type}",
        company_id="c1",
        title=event_type.title(),
        event_date=day,
        event_type=event_type,
        affects_attendance=affects,
    )


def test_plain_weekday_is_full_working_day():
    d = classify_day(WEDNESDAY, MON_FRI)

    assert d.kind == DayKind.WORKING
    assert d.credit == 1.0
    assert d.show_attendance is True


def test_weekend_without_events_is_not_counted():
    d = classify_day(SUNDAY, MON_FRI)

    assert d.kind == DayKind.NON_WORKING
    assert d.credit == 0.0
    assert d.show_attendance is False


def test_holiday_on_working_day_is_paid_and_hides_attendance():
    d = classify_day(WEDNESDAY, MON_FRI, [ev(WEDNESDAY, "holiday")])

    assert d.kind == DayKind.PAID_HOLIDAY
    assert d.credit == 1.0
    assert d.show_attendance is False
    assert d.is_working is False


def test_holiday_on_weekend_still_counts_as_full_day():
    d = classify_day(SATURDAY, MON_FRI, [ev(SATURDAY, "holiday")])

    assert d.credit == 1.0
    assert d.show_attendance is False


def test_holiday_wins_over_special_working_day_and_half_day():
    events = [ev(SUNDAY, "working_day"), ev(SUNDAY, "half_day"), ev(SUNDAY, "holiday")]
    d = classify_day(SUNDAY, MON_FRI, events)

    assert d.kind == DayKind.PAID_HOLIDAY
    assert d.credit == 1.0
    assert d.show_attendance is False


def test_special_working_day_on_weekend_counts_and_shows_attendance():
    d = classify_day(SUNDAY, MON_FRI, [ev(SUNDAY, "working_day")])

    assert d.kind == DayKind.WORKING
    assert d.credit == 1.0
    assert d.show_attendance is True


def test_special_working_day_with_half_day_counts_half():
    d = classify_day(SUNDAY, MON_FRI, [ev(SUNDAY, "working_day"), ev(SUNDAY, "half_day")])

    assert d.kind == DayKind.HALF_DAY
    assert d.credit == 0.5
    assert d.show_attendance is True


def test_half_day_on_regular_working_day_counts_half():
    d = classify_day(WEDNESDAY, MON_FRI, [ev(WEDNESDAY, "half_day")])

    assert d.credit == 0.5


def test_half_day_alone_on_weekend_is_not_counted():
    d = classify_day(SATURDAY, MON_FRI, [ev(SATURDAY, "half_day")])

    assert d.credit == 0.0
    assert d.show_attendance is False


def test_off_day_excludes_a_regular_working_day_unpaid():
    d = classify_day(WEDNESDAY, MON_FRI, [ev(WEDNESDAY, "off_day")])

    assert d.kind == DayKind.OFF_DAY
    assert d.credit == 0.0
    assert d.show_attendance is False


def test_special_working_day_counts_even_when_not_flagged_for_attendance():
    d = classify_day(SUNDAY, MON_FRI, [ev(SUNDAY, "working_day", affects=False)])

    assert d.kind == DayKind.WORKING
    assert d.credit == 1.0
    assert d.show_attendance is True


def test_unflagged_half_day_still_halves_a_special_working_day():
    events = [ev(SUNDAY, "working_day", affects=False), ev(SUNDAY, "half_day", affects=False)]
    d = classify_day(SUNDAY, MON_FRI, events)

    assert d.credit == 0.5
    assert d.show_attendance is True


def test_holiday_hides_attendance_even_when_not_flagged():
    d = classify_day(WEDNESDAY, MON_FRI, [ev(WEDNESDAY, "holiday", affects=False)])

    assert d.kind == DayKind.PAID_HOLIDAY
    assert d.credit == 1.0
    assert d.show_attendance is False


def test_off_day_not_flagged_for_attendance_leaves_the_day_alone():
    d = classify_day(WEDNESDAY, MON_FRI, [ev(WEDNESDAY, "off_day", affects=False)])

    assert d.kind == DayKind.WORKING
    assert d.credit == 1.0
    assert len(d.events) == 1


def test_meeting_training_and_unknown_types_do_not_change_the_day():
    events = [ev(SUNDAY, "meeting"), ev(SUNDAY, "training"), ev(SUNDAY, "company_picnic")]
    d = classify_day(SUNDAY, MON_FRI, events)

    assert d.kind == DayKind.NON_WORKING
    assert [e.event_type for e in d.events] == ["meeting", "training", "company_picnic"]


def test_six_day_week_pattern_counts_saturday():
    config = WorkingDayConfig(company_id="c1", saturday=True)

    assert classify_day(SATURDAY, config).credit == 1.0
    assert classify_day(SUNDAY, config).credit == 0.0
