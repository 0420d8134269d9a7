from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional, Sequence, Union

from ..cache.data_cache import DataCache, scope_pattern
from ..calendar.service import WorkingDayCalendar
from ..common.datetime_utils import month_end, month_key, month_start
from ..common.validators import require_non_empty
from ..core.enums import NOT_SET, AttendanceStatus
from ..core.exceptions import ValidationError
from ..employees.repository import EmployeeRepository
from .model import AttendanceRecord, AttendanceTally, CompanyStats
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def parse_status(value: Union[str, AttendanceStatus]) -> AttendanceStatus:
    if isinstance(value, AttendanceStatus):
        return value
    raw = str(value or "").strip().lower()
    if raw == NOT_SET:
        raise ValidationError("not_set is a placeholder and cannot be saved")
    try:
        return AttendanceStatus(raw)
    except ValueError as exc:
        raise ValidationError(f"Invalid attendance status: {value!r}") from exc


def tally_by_employee(records: Iterable[AttendanceRecord]) -> dict[str, AttendanceTally]:
    tallies: dict[str, AttendanceTally] = {}
    for r in records:
        tallies[r.employee_id] = tallies.get(r.employee_id, AttendanceTally()).add(r.status)
    return tallies


class AttendanceService:
    """Writes attendance marks and keeps the report cache honest.

    Every write invalidates the company's cached report for the affected month
    before returning, so the next read reflects it.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        working_days: WorkingDayCalendar,
        *,
        report_cache: Optional[DataCache] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._working_days = working_days
        self._report_cache = report_cache

    def _invalidate(self, company_id: str, work_date: date) -> None:
        if self._report_cache is not None:
            self._report_cache.invalidate(scope_pattern(company_id, month_key(work_date)))

    def mark(
        self,
        *,
        company_id: str,
        employee_id: str,
        work_date: date,
        status: Union[str, AttendanceStatus],
    ) -> AttendanceStatus:
        company_id = require_non_empty(company_id, "company_id")
        employee_id = require_non_empty(employee_id, "employee_id")
        decided = parse_status(status)

        self._attendance.upsert(employee_id=employee_id, work_date=work_date, status=decided)
        self._invalidate(company_id, work_date)
        logger.info("attendance marked employee=%s date=%s status=%s", employee_id, work_date, decided.value)
        return decided

    def bulk_mark(
        self,
        *,
        company_id: str,
        employee_ids: Sequence[str],
        work_date: date,
        status: Union[str, AttendanceStatus],
    ) -> int:
        company_id = require_non_empty(company_id, "company_id")
        decided = parse_status(status)
        ids = [require_non_empty(e, "employee_id") for e in employee_ids]
        if not ids:
            return 0

        written = self._attendance.upsert_many((e, work_date, decided) for e in ids)
        self._invalidate(company_id, work_date)
        logger.info(
            "attendance bulk marked company=%s date=%s status=%s rows=%d",
            company_id, work_date, decided.value, written,
        )
        return written

    def auto_mark_holiday(self, *, company_id: str, work_date: date) -> int:
        """Mark every active employee present when ``work_date`` is a holiday.

        Returns the number of employees marked (0 when the date has no holiday).
        """
        if not self._working_days.has_holiday(work_date, company_id):
            return 0

        employees = self._employees.list_active(company_id)
        return self.bulk_mark(
            company_id=company_id,
            employee_ids=[e.employee_id for e in employees],
            work_date=work_date,
            status=AttendanceStatus.PRESENT,
        )

    def month_tally(self, employee_ids: Sequence[str], month: date) -> dict[str, AttendanceTally]:
        if not employee_ids:
            return {}
        records = self._attendance.list_for_employees(list(employee_ids), month_start(month), month_end(month))
        tallies = tally_by_employee(records)
        return {e: tallies.get(e, AttendanceTally()) for e in employee_ids}

    def company_stats(self, company_id: str, today: date) -> CompanyStats:
        """Headcount, wage budget and attendance counts for ``today`` and its month.

        Counts cover every employee of the company, inactive ones included; the
        attendance rate is relative to the active headcount.
        """
        company_id = require_non_empty(company_id, "company_id")
        employees = list(self._employees.list_all(company_id))
        if not employees:
            return CompanyStats()

        ids = [e.employee_id for e in employees]
        active = sum(1 for e in employees if e.is_active)
        today_count = len(self._attendance.list_for_employees(ids, today, today))
        month_count = sum(t.total for t in self.month_tally(ids, today).values())

        return CompanyStats(
            total_employees=len(employees),
            active_employees=active,
            today_attendance=today_count,
            # Half-up, so 2.5% shows as 3%.
            attendance_rate=int(today_count * 100 / active + 0.5) if active else 0,
            month_attendance=month_count,
            total_wage_rate=sum(float(e.wage_rate or 0) for e in employees),
        )
