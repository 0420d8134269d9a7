from __future__ import annotations

from dataclasses import asdict
from datetime import date

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import json_body, ok, require_field
from ..core.exceptions import ValidationError


def register(app: Flask, container) -> None:
    @app.route("/api/companies/<company_id>/attendance", methods=["POST"], endpoint="attendance_mark")
    def attendance_mark(company_id: str):
        data = json_body()
        status = container.attendance_service.mark(
            company_id=company_id,
            employee_id=str(require_field(data, "employee_id")),
            work_date=parse_iso_date(str(require_field(data, "date"))),
            status=require_field(data, "status"),
        )
        return ok({"status": status.value})

    @app.route("/api/companies/<company_id>/attendance/bulk", methods=["POST"], endpoint="attendance_bulk_mark")
    def attendance_bulk_mark(company_id: str):
        data = json_body()
        employee_ids = require_field(data, "employee_ids")
        if not isinstance(employee_ids, list):
            raise ValidationError("employee_ids must be a list")
        written = container.attendance_service.bulk_mark(
            company_id=company_id,
            employee_ids=[str(e) for e in employee_ids],
            work_date=parse_iso_date(str(require_field(data, "date"))),
            status=require_field(data, "status"),
        )
        return ok({"marked": written})

    @app.route(
        "/api/companies/<company_id>/attendance/holiday/<day>",
        methods=["POST"],
        endpoint="attendance_holiday_auto_mark",
    )
    def attendance_holiday_auto_mark(company_id: str, day: str):
        marked = container.attendance_service.auto_mark_holiday(company_id=company_id, work_date=parse_iso_date(day))
        return ok({"marked": marked})

    @app.route("/api/companies/<company_id>/stats", methods=["GET"], endpoint="company_stats")
    def company_stats(company_id: str):
        raw = request.args.get("date")
        today = parse_iso_date(raw) if raw else date.today()
        stats = container.attendance_service.company_stats(company_id, today)
        return ok({"date": today.isoformat(), "stats": asdict(stats)})
