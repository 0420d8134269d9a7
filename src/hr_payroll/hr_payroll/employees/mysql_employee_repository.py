from __future__ import annotations

from typing import Sequence

from ..core.enums import EmployeeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Employee
from .repository import EmployeeRepository

_SELECT = "SELECT id, company_id, name, `rank`, wage_rate, status FROM employees"


def _row_to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=str(r["id"]),
        company_id=str(r["company_id"]),
        name=r["name"],
        rank=r.get("rank") or "",
        wage_rate=float(r.get("wage_rate") or 0),
        status=EmployeeStatus(r["status"]),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self, company_id: str) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE company_id=%s AND status=%s ORDER BY name",
                (company_id, EmployeeStatus.ACTIVE.value),
            )
            return [_row_to_employee(r) for r in fetchall(cur)]

    def list_all(self, company_id: str) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE company_id=%s ORDER BY name", (company_id,))
            return [_row_to_employee(r) for r in fetchall(cur)]
