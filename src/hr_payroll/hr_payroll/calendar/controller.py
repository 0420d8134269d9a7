from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import month_key, parse_iso_date, parse_month
from ..common.http import as_int, as_number, json_body, ok, require_field
from ..core.constants import DEFAULT_SALARY_DIVISOR
from ..core.exceptions import ValidationError
from .holidays import HolidayPlan
from .model import DayClassification, Event
from .recurrence import RecurrenceKind, RecurrencePattern, expand_recurrence


def _event_json(e: Event) -> dict:
    return {
        "id": e.event_id,
        "title": e.title,
        "date": e.event_date.isoformat(),
        "type": e.event_type,
        "affects_attendance": e.affects_attendance,
        "description": e.description,
    }


def _day_json(d: DayClassification) -> dict:
    return {
        "date": d.day.isoformat(),
        "kind": d.kind.value,
        "credit": d.credit,
        "is_working_day": d.is_working,
        "show_attendance": d.show_attendance,
        "events": [_event_json(e) for e in d.events],
    }


def _pattern(data: dict) -> RecurrencePattern:
    try:
        kind = RecurrenceKind(str(require_field(data, "type")))
    except ValueError as exc:
        raise ValidationError(f"Invalid recurrence type: {data.get('type')!r}") from exc
    end_date = data.get("end_date")
    return RecurrencePattern(
        kind=kind,
        interval=as_int(data.get("interval") or 1, "interval"),
        days_of_week=tuple(as_int(d, "days_of_week") for d in data.get("days_of_week") or ()),
        end_date=parse_iso_date(end_date) if end_date else None,
    )


def _holiday_plan_json(plan: HolidayPlan, duplicates: list[str]) -> dict:
    return {
        "country": plan.country,
        "year": plan.year,
        "holidays": [{"title": name, "date": day.isoformat()} for name, day in plan.holidays],
        "unresolved": list(plan.unresolved),
        "duplicates": duplicates,
    }


def register(app: Flask, container) -> None:
    @app.route("/api/companies/<company_id>/calendar/<day>", methods=["GET"], endpoint="calendar_day")
    def calendar_day(company_id: str, day: str):
        target = parse_iso_date(day)
        return ok({"day": _day_json(container.working_days.classify_day(target, company_id))})

    @app.route("/api/companies/<company_id>/calendar/months/<month>", methods=["GET"], endpoint="calendar_month")
    def calendar_month(company_id: str, month: str):
        target = parse_month(month)
        resolved = container.working_days.month(target, company_id)
        override = container.override_service.get(company_id, target)
        return ok(
            {
                "month": month_key(target),
                "working_days": resolved.working_days,
                "working_dates": [d.isoformat() for d in resolved.working_dates],
                "override": (
                    {
                        "working_days_count": override.working_days_count,
                        "daily_rate_divisor": override.daily_rate_divisor,
                    }
                    if override
                    else None
                ),
            }
        )

    @app.route(
        "/api/companies/<company_id>/calendar/months/<month>/override",
        methods=["PUT"],
        endpoint="calendar_month_override",
    )
    def calendar_month_override(company_id: str, month: str):
        data = json_body()
        saved = container.override_service.save(
            company_id=company_id,
            month=parse_month(month),
            working_days_count=as_number(require_field(data, "working_days_count"), "working_days_count"),
            daily_rate_divisor=as_number(data.get("daily_rate_divisor", DEFAULT_SALARY_DIVISOR), "daily_rate_divisor"),
        )
        return ok(
            {
                "month": month_key(saved.month),
                "working_days_count": saved.working_days_count,
                "daily_rate_divisor": saved.daily_rate_divisor,
            }
        )

    @app.route("/api/companies/<company_id>/calendar/cache", methods=["DELETE"], endpoint="calendar_refresh")
    def calendar_refresh(company_id: str):
        # Called by the event/settings editors after they write.
        container.working_days.invalidate(company_id)
        container.payroll_report_service.invalidate(company_id)
        return ok()

    @app.route("/api/calendar/recurrence/preview", methods=["POST"], endpoint="calendar_recurrence_preview")
    def calendar_recurrence_preview():
        data = json_body()
        start = parse_iso_date(str(require_field(data, "start")))
        until = parse_iso_date(str(data["until"])) if data.get("until") else None
        dates = expand_recurrence(_pattern(data), start, until)
        return ok({"dates": [d.isoformat() for d in dates]})

    @app.route(
        "/api/companies/<company_id>/holidays/<country>/<int:year>",
        methods=["GET"],
        endpoint="holiday_import_preview",
    )
    def holiday_import_preview(company_id: str, country: str, year: int):
        plan, duplicates = container.holiday_service.preview(company_id, country, year)
        return ok(_holiday_plan_json(plan, duplicates))

    @app.route(
        "/api/companies/<company_id>/holidays/<country>/<int:year>",
        methods=["POST"],
        endpoint="holiday_import",
    )
    def holiday_import(company_id: str, country: str, year: int):
        stored = container.holiday_service.import_holidays(company_id, country, year)
        return ok({"imported": len(stored), "events": [_event_json(e) for e in stored]}, 201)

    @app.route(
        "/api/companies/<company_id>/holidays/<country>/<int:year>",
        methods=["DELETE"],
        endpoint="holiday_remove",
    )
    def holiday_remove(company_id: str, country: str, year: int):
        removed = container.holiday_service.remove_holidays(company_id, country, year)
        return ok({"removed": removed})
