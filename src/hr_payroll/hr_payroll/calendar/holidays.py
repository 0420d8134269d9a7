from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

from ..core.enums import EventType
from ..core.exceptions import ValidationError
from .model import Event

# Rule formats: "MM-DD" for fixed dates, "easter+N"/"easter-N" relative to
# Easter Sunday, "<nth>-<weekday>-<month>" for nth weekday of a month and
# "lunar-calendar" for dates that can't be derived from the Gregorian year.
LUNAR = "lunar-calendar"

_ORDINALS = {"first": 1, "second": 2, "third": 3, "fourth": 4}
_WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
_MONTHS = (
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
)


@dataclass(frozen=True)
class HolidayTemplate:
    name: str
    rule: str


HOLIDAY_TEMPLATES: dict[str, tuple[HolidayTemplate, ...]] = {
    "US": (
        HolidayTemplate("New Year's Day", "01-01"),
        HolidayTemplate("Independence Day", "07-04"),
        HolidayTemplate("Christmas Day", "12-25"),
        HolidayTemplate("Thanksgiving", "fourth-thursday-november"),
    ),
    "UK": (
        HolidayTemplate("New Year's Day", "01-01"),
        HolidayTemplate("Good Friday", "easter-2"),
        HolidayTemplate("Easter Monday", "easter+1"),
        HolidayTemplate("Christmas Day", "12-25"),
        HolidayTemplate("Boxing Day", "12-26"),
    ),
    "IN": (
        HolidayTemplate("Republic Day", "01-26"),
        HolidayTemplate("Independence Day", "08-15"),
        HolidayTemplate("Gandhi Jayanti", "10-02"),
        HolidayTemplate("Diwali", LUNAR),
    ),
    "CA": (
        HolidayTemplate("New Year's Day", "01-01"),
        HolidayTemplate("Canada Day", "07-01"),
        HolidayTemplate("Christmas Day", "12-25"),
        HolidayTemplate("Boxing Day", "12-26"),
    ),
    "PK": (
        HolidayTemplate("New Year's Day", "01-01"),
        HolidayTemplate("Kashmir Day", "02-05"),
        HolidayTemplate("Pakistan Day", "03-23"),
        HolidayTemplate("Labour Day", "05-01"),
        HolidayTemplate("Independence Day", "08-14"),
        HolidayTemplate("Iqbal Day", "11-09"),
        HolidayTemplate("Quaid-e-Azam Birthday", "12-25"),
        HolidayTemplate("Eid-ul-Fitr", LUNAR),
        HolidayTemplate("Eid-ul-Adha", LUNAR),
        HolidayTemplate("Muharram (Ashura)", LUNAR),
        HolidayTemplate("Mawlid un Nabi (Prophet's Birthday)", LUNAR),
        HolidayTemplate("Shab-e-Barat", LUNAR),
        HolidayTemplate("Shab-e-Qadr", LUNAR),
        HolidayTemplate("Chand Raat", LUNAR),
    ),
}


@dataclass(frozen=True)
class HolidayPlan:
    """Holidays a country template yields for one year."""

    country: str
    year: int
    holidays: tuple[tuple[str, date], ...] = ()
    unresolved: tuple[str, ...] = ()

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.holidays] + list(self.unresolved)


def easter_sunday(year: int) -> date:
    # Anonymous Gregorian algorithm (Meeus/Jones/Butcher).
    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month, day = divmod(h + l - 7 * m + 114, 31)
    return date(year, month, day + 1)


def _nth_weekday(year: int, month: int, weekday: int, nth: int) -> date:
    first = date(year, month, 1)
    return first + timedelta(days=(weekday - first.weekday()) % 7 + 7 * (nth - 1))


def resolve_rule(rule: str, year: int) -> Optional[date]:
    """Date of ``rule`` in ``year``; None for lunar-calendar holidays."""
    if rule == LUNAR:
        return None

    if rule.startswith("easter"):
        offset = int(rule[len("easter"):] or 0)
        return easter_sunday(year) + timedelta(days=offset)

    parts = rule.split("-")
    if len(parts) == 3 and parts[0] in _ORDINALS:
        nth, weekday, month = parts
        return _nth_weekday(year, _MONTHS.index(month) + 1, _WEEKDAYS.index(weekday), _ORDINALS[nth])

    month, day = (int(p) for p in parts)
    return date(year, month, day)


def plan_holidays(country: str, year: int) -> HolidayPlan:
    code = str(country or "").strip().upper()
    templates = HOLIDAY_TEMPLATES.get(code)
    if templates is None:
        raise ValidationError(f"No holiday template for country: {country!r}")
    if not 1900 <= int(year) <= 2999:
        raise ValidationError(f"Invalid year: {year}")

    holidays: list[tuple[str, date]] = []
    unresolved: list[str] = []
    for t in templates:
        resolved = resolve_rule(t.rule, int(year))
        if resolved is None:
            unresolved.append(t.name)
        else:
            holidays.append((t.name, resolved))
    return HolidayPlan(country=code, year=int(year), holidays=tuple(holidays), unresolved=tuple(unresolved))


def find_duplicates(plan: HolidayPlan, existing: Iterable[Event]) -> list[str]:
    """Template names already present as holidays in the plan's year, matched by date or title."""
    taken_dates: set[date] = set()
    taken_titles: set[str] = set()
    for e in existing:
        if e.known_type == EventType.HOLIDAY and e.event_date.year == plan.year:
            taken_dates.add(e.event_date)
            taken_titles.add(e.title)

    dupes = [name for name, day in plan.holidays if day in taken_dates or name in taken_titles]
    dupes.extend(name for name in plan.unresolved if name in taken_titles)
    return dupes
