from __future__ import annotations

from datetime import date
from typing import Iterable, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_placeholders, normalize_mysql_date
from .model import AttendanceRecord
from .repository import AttendanceRepository

_UPSERT_SQL = """
    INSERT INTO attendance(employee_id, date, status)
    VALUES(%s,%s,%s)
    ON DUPLICATE KEY UPDATE status=VALUES(status)
"""


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_employees(self, employee_ids: Sequence[str], start: date, end: date) -> Sequence[AttendanceRecord]:
        ids = list(employee_ids)
        if not ids:
            return []

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, employee_id, date, status
                FROM attendance
                WHERE employee_id IN ({in_placeholders(ids)}) AND date BETWEEN %s AND %s
                ORDER BY date
                """,
                (*ids, start, end),
            )
            return [
                AttendanceRecord(
                    attendance_id=str(r["id"]),
                    employee_id=str(r["employee_id"]),
                    work_date=normalize_mysql_date(r["date"]),
                    status=AttendanceStatus(r["status"]),
                )
                for r in fetchall(cur)
            ]

    def upsert(self, *, employee_id: str, work_date: date, status: AttendanceStatus) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_UPSERT_SQL, (employee_id, work_date, status.value))

    def upsert_many(self, rows: Iterable[tuple[str, date, AttendanceStatus]]) -> int:
        params = [(employee_id, work_date, status.value) for employee_id, work_date, status in rows]
        if not params:
            return 0

        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(_UPSERT_SQL, params)
        return len(params)
