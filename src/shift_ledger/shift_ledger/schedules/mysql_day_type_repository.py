from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import DayType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .day_type_repository import DayTypeRepository
from .model import CalendarException


class MySQLDayTypeRepository(DayTypeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_day_type(self, work_date: date) -> DayType:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT day_type FROM calendar_exceptions WHERE work_date=%s", (work_date,))
            r = fetchone(cur)
            return DayType(r["day_type"]) if r else DayType.OPEN

    def list_range(self, *, start: date, end: date) -> Sequence[CalendarException]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT work_date, day_type, note
                FROM calendar_exceptions
                WHERE work_date BETWEEN %s AND %s
                ORDER BY work_date ASC
                """,
                (start, end),
            )
            return [
                CalendarException(work_date=r["work_date"], day_type=DayType(r["day_type"]), note=r.get("note"))
                for r in fetchall(cur)
            ]
