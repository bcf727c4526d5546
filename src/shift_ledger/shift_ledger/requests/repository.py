from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional, Protocol, Sequence

from ..core.enums import RequestStatus, ShiftSlot, StampAction
from .model import MakeupRequest


class RequestRepository(Protocol):
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
        """Insert a pending request and return its generated id."""

        raise NotImplementedError

    def get(self, *, request_id: int) -> Optional[MakeupRequest]:
        raise NotImplementedError

    def lock_for_update(self, tx: Any, *, request_id: int) -> Optional[MakeupRequest]:
        raise NotImplementedError

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
        raise NotImplementedError

    def list_requests(
        self,
        *,
        status: Optional[RequestStatus] = None,
        employee_id: Optional[str] = None,
        limit: int = 200,
    ) -> Sequence[MakeupRequest]:
        """Oldest first."""

        raise NotImplementedError

    def count_approved_between(self, *, employee_id: str, start: date, end: date) -> int:
        """Approved requests whose target date falls in [start, end]."""

        raise NotImplementedError
