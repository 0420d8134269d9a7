from __future__ import annotations

from typing import Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    def list_active(self, company_id: str) -> Sequence[Employee]:
        """Active employees of a company ordered by name."""

        raise NotImplementedError

    def list_all(self, company_id: str) -> Sequence[Employee]:
        """Every employee of a company regardless of status."""

        raise NotImplementedError
