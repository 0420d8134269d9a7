from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..attendance.model import AttendanceTally
from ..attendance.repository import AttendanceRepository
from ..attendance.service import tally_by_employee
from ..cache.data_cache import DataCache, cache_key, scope_pattern
from ..calendar.repository import CalendarRepository
from ..calendar.service import WorkingDayCalendar
from ..common.datetime_utils import month_end, month_key, month_start
from ..common.validators import require_non_empty
from ..core.constants import REPORT_CACHE_TTL_SECONDS
from ..core.enums import DivisorPolicy
from ..employees.repository import EmployeeRepository
from .calculator.base import SalaryCalculator
from .calculator.standard_calculator import StandardSalaryCalculator
from .model import EmployeeSalaryRow, MonthBasis, ReportData, ReportStats, SalaryCalculationResult

logger = logging.getLogger(__name__)


class SalaryService:
    """Daily rate and calculated salary for one employee-month.

    The month basis comes from one place for every caller: a stored monthly
    override wins over the resolved calendar, and the company's divisor policy
    picks between the working-day count and the fixed divisor.
    """

    def __init__(
        self,
        calendar: CalendarRepository,
        working_days: WorkingDayCalendar,
        *,
        calculator: Optional[SalaryCalculator] = None,
    ):
        self._calendar = calendar
        self._working_days = working_days
        self._calculator = calculator or StandardSalaryCalculator()

    def resolve_month(self, month: date, company_id: str) -> MonthBasis:
        start = month_start(month)
        settings = self._working_days.get_settings(company_id)
        override = self._calendar.get_monthly_override(company_id, start)

        if override is not None:
            total = float(override.working_days_count)
            fixed = float(override.daily_rate_divisor)
        else:
            total = self._working_days.working_days_in_month(start, company_id)
            fixed = float(settings.salary_divisor)

        divisor = fixed if settings.divisor_policy == DivisorPolicy.FIXED_DIVISOR else total
        return MonthBasis(
            month=start,
            total_working_days=total,
            daily_rate_divisor=divisor,
            from_override=override is not None,
        )

    def calculate_with_basis(
        self,
        basis: MonthBasis,
        *,
        monthly_salary: float,
        present_days: float,
        short_leave_days: float,
    ) -> SalaryCalculationResult:
        return self._calculator.calculate(
            monthly_salary=monthly_salary,
            present_days=present_days,
            short_leave_days=short_leave_days,
            total_working_days=basis.total_working_days,
            divisor=basis.daily_rate_divisor,
        )

    def calculate_employee_salary(
        self,
        monthly_salary: float,
        present_days: float,
        short_leave_days: float,
        month: date,
        company_id: str,
    ) -> SalaryCalculationResult:
        company_id = require_non_empty(company_id, "company_id")
        basis = self.resolve_month(month, company_id)
        return self.calculate_with_basis(
            basis,
            monthly_salary=monthly_salary,
            present_days=present_days,
            short_leave_days=short_leave_days,
        )


class PayrollReportService:
    """Month salary report for all active employees of a company.

    Results are cached for five minutes per (company, month). Writers must call
    ``invalidate`` (or share ``cache`` with a service that does) to see their
    own writes before the entry expires.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        salary: SalaryService,
        *,
        cache: Optional[DataCache] = None,
        cache_ttl: float = REPORT_CACHE_TTL_SECONDS,
    ):
        self._employees = employees
        self._attendance = attendance
        self._salary = salary
        self._cache = cache if cache is not None else DataCache(default_ttl=cache_ttl, name="report")
        self._cache_ttl = float(cache_ttl)

    @property
    def cache(self) -> DataCache:
        return self._cache

    def fetch_report_data(self, company_id: str, month: date) -> ReportData:
        company_id = require_non_empty(company_id, "company_id")
        start, end = month_start(month), month_end(month)
        key = cache_key("report", company_id, month_key(start))

        cached = self._cache.get(key)
        if cached is not None:
            return cached

        employees = list(self._employees.list_active(company_id))
        basis = self._salary.resolve_month(start, company_id)

        if not employees:
            report = ReportData(
                employee_data=[],
                stats=ReportStats(total_working_days_this_month=basis.total_working_days),
            )
            self._cache.set(key, report, self._cache_ttl)
            return report

        records = self._attendance.list_for_employees([e.employee_id for e in employees], start, end)
        tallies = tally_by_employee(records)

        rows: list[EmployeeSalaryRow] = []
        for emp in employees:
            tally = tallies.get(emp.employee_id, AttendanceTally())
            monthly_salary = float(emp.wage_rate or 0)
            result = self._salary.calculate_with_basis(
                basis,
                monthly_salary=monthly_salary,
                present_days=tally.present_days,
                short_leave_days=tally.short_leave_days,
            )
            rows.append(
                EmployeeSalaryRow(
                    employee_id=emp.employee_id,
                    employee_name=emp.name,
                    rank=emp.rank,
                    monthly_salary=monthly_salary,
                    present_days=tally.present_days,
                    short_leave_days=tally.short_leave_days,
                    leave_days=tally.leave_days,
                    actual_working_days=result.actual_working_days,
                    daily_rate=result.daily_rate,
                    calculated_salary=result.calculated_salary,
                )
            )

        report = ReportData(employee_data=rows, stats=self._stats(rows, basis.total_working_days))
        logger.debug(
            "built report company=%s month=%s employees=%d total=%s",
            company_id, month_key(start), len(rows), report.stats.total_calculated_salary,
        )
        self._cache.set(key, report, self._cache_ttl)
        return report

    @staticmethod
    def _stats(rows: list[EmployeeSalaryRow], total_working_days: float) -> ReportStats:
        count = len(rows)
        if count == 0:
            return ReportStats(total_working_days_this_month=total_working_days)

        return ReportStats(
            total_calculated_salary=sum(r.calculated_salary for r in rows),
            total_budget_salary=sum(r.monthly_salary for r in rows),
            total_employees=count,
            average_attendance=sum(r.actual_working_days for r in rows) / count,
            average_daily_rate=sum(r.daily_rate for r in rows) / count,
            total_working_days_this_month=total_working_days,
        )

    def invalidate(self, company_id: Optional[str] = None, month: Optional[date] = None) -> None:
        if company_id is None:
            self._cache.invalidate()
            return
        self._cache.invalidate(scope_pattern(company_id, month_key(month) if month else None))
