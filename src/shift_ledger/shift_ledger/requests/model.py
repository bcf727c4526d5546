from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import RequestStatus, ShiftSlot, StampAction


@dataclass(frozen=True)
class MakeupRequest:
    """An employee's request to record a missed stamp, kept as an audit trail."""

    request_id: int
    employee_id: str
    requested_by: str
    work_date: date
    shift: ShiftSlot
    action: StampAction
    reason: str
    status: RequestStatus
    created_at: datetime
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    review_note: Optional[str] = None
    stamped_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING

    def to_payload(self) -> dict:
        return {
            "request_id": self.request_id,
            "employee_id": self.employee_id,
            "requested_by": self.requested_by,
            "work_date": self.work_date.strftime("%Y-%m-%d"),
            "shift": self.shift.value,
            "action": self.action.value,
            "reason": self.reason,
            "status": self.status.value,
            "created_at": self.created_at.isoformat(timespec="seconds"),
            "reviewed_by": self.reviewed_by,
            "reviewed_at": self.reviewed_at.isoformat(timespec="seconds") if self.reviewed_at else None,
            "review_note": self.review_note,
            "stamped_at": self.stamped_at.isoformat(timespec="seconds") if self.stamped_at else None,
        }
