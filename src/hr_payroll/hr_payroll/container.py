from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .cache.data_cache import DataCache
from .calendar.mysql_calendar_repository import MySQLCalendarRepository
from .calendar.service import HolidayImportService, MonthlyOverrideService, WorkingDayCalendar
from .core.constants import CALENDAR_CACHE_TTL_SECONDS, REPORT_CACHE_TTL_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .payroll.service import PayrollReportService, SalaryService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: MySQLEmployeeRepository
    attendance_repo: MySQLAttendanceRepository
    calendar_repo: MySQLCalendarRepository

    calendar_cache: DataCache
    report_cache: DataCache

    working_days: WorkingDayCalendar
    override_service: MonthlyOverrideService
    holiday_service: HolidayImportService
    salary_service: SalaryService
    payroll_report_service: PayrollReportService
    attendance_service: AttendanceService


def build_container(
    *,
    db_config: dict,
    report_cache_ttl: float = REPORT_CACHE_TTL_SECONDS,
    calendar_cache_ttl: float = CALENDAR_CACHE_TTL_SECONDS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    employees_repo = MySQLEmployeeRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    calendar_repo = MySQLCalendarRepository(conn)

    # One cache per consumer; attendance and override writes invalidate the report cache.
    calendar_cache = DataCache(default_ttl=calendar_cache_ttl, name="calendar")
    report_cache = DataCache(default_ttl=report_cache_ttl, name="report")

    working_days = WorkingDayCalendar(calendar_repo, cache=calendar_cache, cache_ttl=calendar_cache_ttl)
    override_service = MonthlyOverrideService(calendar_repo, working_days, report_cache=report_cache)
    holiday_service = HolidayImportService(calendar_repo, working_days, report_cache=report_cache)
    salary_service = SalaryService(calendar_repo, working_days)
    payroll_report_service = PayrollReportService(
        employees_repo,
        attendance_repo,
        salary_service,
        cache=report_cache,
        cache_ttl=report_cache_ttl,
    )
    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        working_days,
        report_cache=report_cache,
    )

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        calendar_repo=calendar_repo,
        calendar_cache=calendar_cache,
        report_cache=report_cache,
        working_days=working_days,
        override_service=override_service,
        holiday_service=holiday_service,
        salary_service=salary_service,
        payroll_report_service=payroll_report_service,
        attendance_service=attendance_service,
    )
