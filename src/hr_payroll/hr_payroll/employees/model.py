from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import EmployeeStatus


@dataclass(frozen=True)
class Employee:
    employee_id: str
    company_id: str
    name: str
    rank: str
    wage_rate: float
    status: EmployeeStatus = EmployeeStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE
