from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional, Sequence

from ..core.enums import RequestStatus, ShiftSlot, StampAction
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import MakeupRequest
from .repository import RequestRepository

_SELECT = """
    SELECT request_id, employee_id, requested_by, work_date, shift, action, reason,
           status, created_at, reviewed_by, reviewed_at, review_note, stamped_at
    FROM makeup_requests
"""


def _to_model(r: dict) -> MakeupRequest:
    return MakeupRequest(
        request_id=int(r["request_id"]),
        employee_id=str(r["employee_id"]),
        requested_by=str(r["requested_by"]),
        work_date=r["work_date"],
        shift=ShiftSlot(r["shift"]),
        action=StampAction(r["action"]),
        reason=r["reason"],
        status=RequestStatus(r["status"]),
        created_at=r["created_at"],
        reviewed_by=r.get("reviewed_by"),
        reviewed_at=r.get("reviewed_at"),
        review_note=r.get("review_note"),
        stamped_at=r.get("stamped_at"),
    )


class MySQLRequestRepository(RequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        employee_id: str,
        requested_by: str,
        work_date: date,
        shift: ShiftSlot,
        action: StampAction,
        reason: str,
        created_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO makeup_requests(
                    employee_id, requested_by, work_date, shift, action, reason, status, created_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    employee_id,
                    requested_by,
                    work_date,
                    shift.value,
                    action.value,
                    reason,
                    RequestStatus.PENDING.value,
                    created_at,
                ),
            )
            return int(cur.lastrowid)

    def get(self, *, request_id: int) -> Optional[MakeupRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _to_model(r) if r else None

    def lock_for_update(self, tx: Any, *, request_id: int) -> Optional[MakeupRequest]:
        tx.execute(_SELECT + " WHERE request_id=%s FOR UPDATE", (int(request_id),))
        r = fetchone(tx)
        return _to_model(r) if r else None

    def save_decision(
        self,
        tx: Any,
        *,
        request_id: int,
        status: RequestStatus,
        reviewed_by: str,
        reviewed_at: datetime,
        review_note: Optional[str] = None,
        stamped_at: Optional[datetime] = None,
    ) -> None:
        tx.execute(
            """
            UPDATE makeup_requests
            SET status=%s, reviewed_by=%s, reviewed_at=%s, review_note=%s, stamped_at=%s
            WHERE request_id=%s
            """,
            (status.value, reviewed_by, reviewed_at, review_note, stamped_at, int(request_id)),
        )

    def list_requests(
        self,
        *,
        status: Optional[RequestStatus] = None,
        employee_id: Optional[str] = None,
        limit: int = 200,
    ) -> Sequence[MakeupRequest]:
        clauses = []
        params: list[object] = []
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(employee_id)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + f" {where} ORDER BY created_at ASC, request_id ASC LIMIT %s", tuple(params))
            return [_to_model(r) for r in fetchall(cur)]

    def count_approved_between(self, *, employee_id: str, start: date, end: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS n
                FROM makeup_requests
                WHERE employee_id=%s AND status=%s AND work_date BETWEEN %s AND %s
                """,
                (employee_id, RequestStatus.APPROVED.value, start, end),
            )
            r = fetchone(cur)
            return int(r["n"]) if r else 0
