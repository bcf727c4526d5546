from __future__ import annotations

from datetime import date

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .leave_repository import LeaveRepository


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def personal_leave_days(self, *, employee_id: str, start: date, end: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(DISTINCT leave_date) AS n
                FROM leave_days
                WHERE employee_id=%s AND leave_type='personal' AND leave_date BETWEEN %s AND %s
                """,
                (employee_id, start, end),
            )
            r = fetchone(cur)
            return int(r["n"]) if r else 0
