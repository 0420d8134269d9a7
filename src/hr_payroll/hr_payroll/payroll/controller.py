from __future__ import annotations

from dataclasses import asdict

from flask import Flask

from ..common.datetime_utils import month_key, parse_month
from ..common.http import as_number, json_body, ok, require_field
from .model import ReportData, round_amount

_AMOUNT_FIELDS = {
    "monthly_salary",
    "daily_rate",
    "calculated_salary",
    "total_calculated_salary",
    "total_budget_salary",
    "average_attendance",
    "average_daily_rate",
}


def _rounded(values: dict) -> dict:
    return {k: round_amount(v) if k in _AMOUNT_FIELDS else v for k, v in values.items()}


def report_payload(report: ReportData) -> dict:
    return {
        "employee_data": [_rounded(asdict(r)) for r in report.employee_data],
        "stats": _rounded(asdict(report.stats)),
    }


def register(app: Flask, container) -> None:
    @app.route("/api/companies/<company_id>/reports/<month>", methods=["GET"], endpoint="salary_report")
    def salary_report(company_id: str, month: str):
        target = parse_month(month)
        report = container.payroll_report_service.fetch_report_data(company_id, target)
        return ok({"month": month_key(target), **report_payload(report)})

    @app.route("/api/companies/<company_id>/reports/<month>/cache", methods=["DELETE"], endpoint="salary_report_refresh")
    def salary_report_refresh(company_id: str, month: str):
        target = parse_month(month)
        container.payroll_report_service.invalidate(company_id, target)
        return ok({"month": month_key(target)})

    @app.route("/api/salary/calculate", methods=["POST"], endpoint="salary_calculate")
    def salary_calculate():
        data = json_body()
        target = parse_month(str(require_field(data, "month")))
        result = container.salary_service.calculate_employee_salary(
            as_number(require_field(data, "monthly_salary"), "monthly_salary"),
            as_number(data.get("present_days") or 0, "present_days"),
            as_number(data.get("short_leave_days") or 0, "short_leave_days"),
            target,
            str(require_field(data, "company_id")),
        )
        return ok({"result": _rounded(asdict(result))})
