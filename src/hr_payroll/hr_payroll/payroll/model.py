from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class SalaryCalculationResult:
    total_working_days: float
    daily_rate: float
    actual_working_days: float
    calculated_salary: float
    daily_rate_divisor: float


@dataclass(frozen=True)
class MonthBasis:
    """Denominators shared by every employee of a company for one month."""

    month: date
    total_working_days: float
    daily_rate_divisor: float
    from_override: bool = False


@dataclass(frozen=True)
class EmployeeSalaryRow:
    employee_id: str
    employee_name: str
    rank: str
    monthly_salary: float
    present_days: int
    short_leave_days: int
    leave_days: int
    actual_working_days: float
    daily_rate: float
    calculated_salary: float


@dataclass(frozen=True)
class ReportStats:
    total_calculated_salary: float = 0.0
    total_budget_salary: float = 0.0
    total_employees: int = 0
    average_attendance: float = 0.0
    average_daily_rate: float = 0.0
    total_working_days_this_month: float = 0.0


@dataclass(frozen=True)
class ReportData:
    employee_data: list[EmployeeSalaryRow] = field(default_factory=list)
    stats: ReportStats = field(default_factory=ReportStats)


def round_amount(value: float, places: int = 2) -> float:
    """Presentation rounding; the engine itself never rounds."""
    return round(float(value), places)
