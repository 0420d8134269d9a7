from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """One attendance mark; unique per (employee_id, work_date)."""

    attendance_id: str
    employee_id: str
    work_date: date
    status: AttendanceStatus


@dataclass(frozen=True)
class AttendanceTally:
    """Per-employee counts of each mark over a period."""

    present_days: int = 0
    short_leave_days: int = 0
    leave_days: int = 0

    def add(self, status: AttendanceStatus) -> "AttendanceTally":
        if status == AttendanceStatus.PRESENT:
            return AttendanceTally(self.present_days + 1, self.short_leave_days, self.leave_days)
        if status == AttendanceStatus.SHORT_LEAVE:
            return AttendanceTally(self.present_days, self.short_leave_days + 1, self.leave_days)
        if status == AttendanceStatus.LEAVE:
            return AttendanceTally(self.present_days, self.short_leave_days, self.leave_days + 1)
        return self

    @property
    def total(self) -> int:
        return self.present_days + self.short_leave_days + self.leave_days


@dataclass(frozen=True)
class CompanyStats:
    """Dashboard headline numbers for one company on one day."""

    total_employees: int = 0
    active_employees: int = 0
    today_attendance: int = 0
    attendance_rate: int = 0  # percent of active employees marked today
    month_attendance: int = 0
    total_wage_rate: float = 0.0
