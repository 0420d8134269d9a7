from __future__ import annotations

from datetime import date
from typing import Iterable, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_for_employees(self, employee_ids: Sequence[str], start: date, end: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def upsert(self, *, employee_id: str, work_date: date, status: AttendanceStatus) -> None:
        """Insert or replace the mark for (employee_id, work_date)."""

        raise NotImplementedError

    def upsert_many(self, rows: Iterable[tuple[str, date, AttendanceStatus]]) -> int:
        """Batch variant of ``upsert``. Returns the number of rows written."""

        raise NotImplementedError
