from __future__ import annotations

from datetime import date
from typing import Iterable

from ..core.constants import FULL_DAY_CREDIT, HALF_DAY_CREDIT
from ..core.enums import DayKind, EventType
from .model import DayClassification, Event, WorkingDayConfig

# Calendar effect of each event type. Types missing here (meeting, training,
# anything unknown) leave the day as the weekly pattern has it.
EVENT_EFFECTS: dict[EventType, DayKind] = {
    EventType.HOLIDAY: DayKind.PAID_HOLIDAY,
    EventType.OFF_DAY: DayKind.OFF_DAY,
    EventType.WORKING_DAY: DayKind.WORKING,
    EventType.HALF_DAY: DayKind.HALF_DAY,
}

# Holiday, special working day and half day always apply; the remaining
# effects only when the event is flagged as affecting attendance.
ALWAYS_APPLIED: frozenset[EventType] = frozenset(
    {EventType.HOLIDAY, EventType.WORKING_DAY, EventType.HALF_DAY}
)


def event_effects(events: Iterable[Event]) -> set[DayKind]:
    effects: set[DayKind] = set()
    for e in events:
        kind = e.known_type
        if kind not in EVENT_EFFECTS:
            continue
        if kind in ALWAYS_APPLIED or e.affects_attendance:
            effects.add(EVENT_EFFECTS[kind])
    return effects


def classify_day(day: date, config: WorkingDayConfig, events: Iterable[Event] = ()) -> DayClassification:
    """Resolve one date against the weekly pattern and that date's events.

    Precedence: paid holiday, then off day, then special working day or the
    weekly pattern (halved by a half-day event), then not counted.
    """
    events = tuple(events)
    effects = event_effects(events)

    if DayKind.PAID_HOLIDAY in effects:
        return DayClassification(day, DayKind.PAID_HOLIDAY, FULL_DAY_CREDIT, False, events)

    if DayKind.OFF_DAY in effects:
        return DayClassification(day, DayKind.OFF_DAY, 0.0, False, events)

    if DayKind.WORKING in effects or config.is_working_weekday(day):
        if DayKind.HALF_DAY in effects:
            return DayClassification(day, DayKind.HALF_DAY, HALF_DAY_CREDIT, True, events)
        return DayClassification(day, DayKind.WORKING, FULL_DAY_CREDIT, True, events)

    return DayClassification(day, DayKind.NON_WORKING, 0.0, False, events)
