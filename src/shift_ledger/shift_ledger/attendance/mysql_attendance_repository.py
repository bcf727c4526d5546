from __future__ import annotations

from datetime import date
from typing import Any, Optional, Sequence

from ..core.enums import ShiftSlot, StampSource
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord, SlotRecord
from .repository import AttendanceRepository

_SLOT_FIELDS = (
    "check_in",
    "check_out",
    "check_in_source",
    "check_out_source",
    "planned_start",
    "planned_end",
    "has_schedule",
    "late_minutes",
    "early_minutes",
    "overtime_minutes",
    "out_of_order",
)

_COLUMNS = ["employee_id", "work_date", "updated_at"] + [
    f"{shift.value}_{name}" for shift in ShiftSlot for name in _SLOT_FIELDS
]
_SELECT = ", ".join(_COLUMNS)


def _source(value) -> Optional[StampSource]:
    return StampSource(value) if value else None


def _slot_from_row(r: dict, shift: ShiftSlot) -> SlotRecord:
    p = f"{shift.value}_"
    return SlotRecord(
        check_in=r.get(p + "check_in"),
        check_out=r.get(p + "check_out"),
        check_in_source=_source(r.get(p + "check_in_source")),
        check_out_source=_source(r.get(p + "check_out_source")),
        planned_start=r.get(p + "planned_start"),
        planned_end=r.get(p + "planned_end"),
        has_schedule=bool(r.get(p + "has_schedule")),
        late_minutes=int(r.get(p + "late_minutes") or 0),
        early_minutes=int(r.get(p + "early_minutes") or 0),
        overtime_minutes=int(r.get(p + "overtime_minutes") or 0),
        out_of_order=bool(r.get(p + "out_of_order")),
    )


def _slot_params(slot: SlotRecord) -> tuple:
    return (
        slot.check_in,
        slot.check_out,
        slot.check_in_source.value if slot.check_in_source else None,
        slot.check_out_source.value if slot.check_out_source else None,
        slot.planned_start,
        slot.planned_end,
        int(slot.has_schedule),
        int(slot.late_minutes),
        int(slot.early_minutes),
        int(slot.overtime_minutes),
        int(slot.out_of_order),
    )


def _to_model(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        employee_id=str(r["employee_id"]),
        work_date=r["work_date"],
        morning=_slot_from_row(r, ShiftSlot.MORNING),
        night=_slot_from_row(r, ShiftSlot.NIGHT),
        updated_at=r.get("updated_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_SELECT} FROM attendance_records WHERE employee_id=%s AND work_date=%s",
                (employee_id, work_date),
            )
            r = fetchone(cur)
            return _to_model(r) if r else None

    def list_range(self, *, employee_id: str, start: date, end: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_SELECT}
                FROM attendance_records
                WHERE employee_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date ASC
                """,
                (employee_id, start, end),
            )
            return [_to_model(r) for r in fetchall(cur)]

    def lock_for_update(self, tx: Any, *, employee_id: str, work_date: date) -> AttendanceRecord:
        # INSERT IGNORE makes concurrent first stamps converge on one row.
        tx.execute(
            "INSERT IGNORE INTO attendance_records(employee_id, work_date) VALUES(%s,%s)",
            (employee_id, work_date),
        )
        tx.execute(
            f"SELECT {_SELECT} FROM attendance_records WHERE employee_id=%s AND work_date=%s FOR UPDATE",
            (employee_id, work_date),
        )
        return _to_model(fetchone(tx))

    def save(self, tx: Any, record: AttendanceRecord) -> None:
        assignments = ", ".join(f"{col}=%s" for col in _COLUMNS[2:])
        params = (record.updated_at,) + _slot_params(record.morning) + _slot_params(record.night)
        tx.execute(
            f"UPDATE attendance_records SET {assignments} WHERE employee_id=%s AND work_date=%s",
            params + (record.employee_id, record.work_date),
        )
