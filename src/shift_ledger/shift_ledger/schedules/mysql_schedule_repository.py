from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import ShiftSlot
from ..core.exceptions import BadSchedule
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import PlannedShift
from .repository import ScheduleRepository


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_model(r: dict) -> PlannedShift:
        try:
            start_time = normalize_mysql_time(r.get("start_time"))
            end_time = normalize_mysql_time(r.get("end_time"))
        except (TypeError, ValueError) as e:
            raise BadSchedule(f"Unreadable schedule times for {r['employee_id']} on {r['work_date']}: {e}")
        return PlannedShift(
            employee_id=str(r["employee_id"]),
            work_date=r["work_date"],
            shift=ShiftSlot(r["shift"]),
            start_time=start_time,
            end_time=end_time,
        )

    def get_schedule(self, *, employee_id: str, work_date: date, shift: ShiftSlot) -> Optional[PlannedShift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, work_date, shift, start_time, end_time
                FROM schedules
                WHERE employee_id=%s AND work_date=%s AND shift=%s
                """,
                (employee_id, work_date, shift.value),
            )
            r = fetchone(cur)
            if not r:
                return None
            return self._to_model(r)

    def list_range(self, *, employee_id: str, start: date, end: date) -> Sequence[PlannedShift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, work_date, shift, start_time, end_time
                FROM schedules
                WHERE employee_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date ASC, shift ASC
                """,
                (employee_id, start, end),
            )
            out: list[PlannedShift] = []
            for r in fetchall(cur):
                try:
                    out.append(self._to_model(r))
                except BadSchedule:
                    # Keep the day visible as scheduled; stats degrade to zero downstream.
                    out.append(
                        PlannedShift(
                            employee_id=str(r["employee_id"]),
                            work_date=r["work_date"],
                            shift=ShiftSlot(r["shift"]),
                            start_time=None,
                            end_time=None,
                        )
                    )
            return out
