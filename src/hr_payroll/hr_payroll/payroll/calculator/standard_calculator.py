from __future__ import annotations

from ...core.constants import SHORT_LEAVE_CREDIT
from ..model import SalaryCalculationResult
from .base import SalaryCalculator


class StandardSalaryCalculator(SalaryCalculator):
    """Standard rule: monthly / divisor per day, short leave counts half a day.

    Leave days earn nothing and inputs are not validated here. A zero divisor
    or a month without working days yields a zero daily rate.
    """

    def calculate(
        self,
        *,
        monthly_salary: float,
        present_days: float,
        short_leave_days: float,
        total_working_days: float,
        divisor: float,
    ) -> SalaryCalculationResult:
        monthly_salary = float(monthly_salary)
        divisor = float(divisor)
        # A fixed divisor must not pay out a month that has no working days.
        paid_month = divisor != 0 and float(total_working_days) > 0
        daily_rate = monthly_salary / divisor if paid_month else 0.0
        actual_working_days = float(present_days) + float(short_leave_days) * SHORT_LEAVE_CREDIT

        return SalaryCalculationResult(
            total_working_days=float(total_working_days),
            daily_rate=daily_rate,
            actual_working_days=actual_working_days,
            calculated_salary=daily_rate * actual_working_days,
            daily_rate_divisor=divisor,
        )
