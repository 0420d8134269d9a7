from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..core.enums import DivisorPolicy
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_placeholders, normalize_mysql_date
from .model import CompanyWorkingSettings, Event, MonthlyWorkingDaysOverride, WorkingDayConfig
from .repository import CalendarRepository


class MySQLCalendarRepository(CalendarRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_working_days_config(self, company_id: str) -> Optional[WorkingDayConfig]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT company_id, monday, tuesday, wednesday, thursday, friday, saturday, sunday
                FROM working_days_config
                WHERE company_id=%s
                """,
                (company_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return WorkingDayConfig(
                company_id=str(r["company_id"]),
                monday=bool(r["monday"]),
                tuesday=bool(r["tuesday"]),
                wednesday=bool(r["wednesday"]),
                thursday=bool(r["thursday"]),
                friday=bool(r["friday"]),
                saturday=bool(r["saturday"]),
                sunday=bool(r["sunday"]),
            )

    def get_company_settings(self, company_id: str) -> Optional[CompanyWorkingSettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT company_id, default_working_days_per_week, default_working_days_per_month,
                       salary_divisor, weekend_saturday, weekend_sunday, divisor_policy
                FROM company_working_settings
                WHERE company_id=%s
                """,
                (company_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return CompanyWorkingSettings(
                company_id=str(r["company_id"]),
                default_working_days_per_week=int(r["default_working_days_per_week"]),
                default_working_days_per_month=int(r["default_working_days_per_month"]),
                salary_divisor=int(r["salary_divisor"]),
                weekend_saturday=bool(r["weekend_saturday"]),
                weekend_sunday=bool(r["weekend_sunday"]),
                divisor_policy=DivisorPolicy(r.get("divisor_policy") or DivisorPolicy.DYNAMIC_CALENDAR.value),
            )

    def list_events(self, company_id: str, start: date, end: date) -> Sequence[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, company_id, title, date, type, affects_attendance, description
                FROM events
                WHERE company_id=%s AND date BETWEEN %s AND %s
                ORDER BY date, id
                """,
                (company_id, start, end),
            )
            return [
                Event(
                    event_id=str(r["id"]),
                    company_id=str(r["company_id"]),
                    title=r["title"],
                    event_date=normalize_mysql_date(r["date"]),
                    event_type=str(r["type"]),
                    affects_attendance=bool(r["affects_attendance"]),
                    description=r.get("description"),
                )
                for r in fetchall(cur)
            ]

    def get_monthly_override(self, company_id: str, month: date) -> Optional[MonthlyWorkingDaysOverride]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT company_id, month, working_days_count, daily_rate_divisor
                FROM monthly_working_days
                WHERE company_id=%s AND month=%s
                """,
                (company_id, month),
            )
            r = fetchone(cur)
            if not r:
                return None
            return MonthlyWorkingDaysOverride(
                company_id=str(r["company_id"]),
                month=normalize_mysql_date(r["month"]),
                working_days_count=float(r["working_days_count"]),
                daily_rate_divisor=float(r["daily_rate_divisor"]),
            )

    def upsert_monthly_override(self, override: MonthlyWorkingDaysOverride) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO monthly_working_days(company_id, month, working_days_count, daily_rate_divisor)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    working_days_count=VALUES(working_days_count),
                    daily_rate_divisor=VALUES(daily_rate_divisor)
                """,
                (override.company_id, override.month, override.working_days_count, override.daily_rate_divisor),
            )

    def insert_events(self, events: Sequence[Event]) -> list[Event]:
        if not events:
            return []
        stored: list[Event] = []
        with db_cursor(self._conn_factory) as (_, cur):
            for e in events:
                cur.execute(
                    """
                    INSERT INTO events(company_id, title, date, type, affects_attendance, description)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (e.company_id, e.title, e.event_date, e.event_type, int(e.affects_attendance), e.description),
                )
                stored.append(replace(e, event_id=str(cur.lastrowid)))
        return stored

    def delete_events(self, company_id: str, event_type: str, titles: Sequence[str], start: date, end: date) -> int:
        if not titles:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                DELETE FROM events
                WHERE company_id=%s AND type=%s AND title IN ({in_placeholders(list(titles))})
                  AND date BETWEEN %s AND %s
                """,
                (company_id, event_type, *titles, start, end),
            )
            return int(cur.rowcount or 0)
