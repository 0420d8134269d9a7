from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import SalaryCalculationResult


class SalaryCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(
        self,
        *,
        monthly_salary: float,
        present_days: float,
        short_leave_days: float,
        total_working_days: float,
        divisor: float,
    ) -> SalaryCalculationResult:
        raise NotImplementedError
