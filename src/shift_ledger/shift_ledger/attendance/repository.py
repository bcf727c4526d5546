from __future__ import annotations

from datetime import date
from typing import Any, Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_range(self, *, employee_id: str, start: date, end: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def lock_for_update(self, tx: Any, *, employee_id: str, work_date: date) -> AttendanceRecord:
        """Create the two-slot skeleton if absent and lock the row for the rest of ``tx``."""

        raise NotImplementedError

    def save(self, tx: Any, record: AttendanceRecord) -> None:
        raise NotImplementedError
