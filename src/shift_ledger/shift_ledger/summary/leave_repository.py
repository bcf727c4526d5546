from __future__ import annotations

from datetime import date
from typing import Protocol


class LeaveRepository(Protocol):
    def personal_leave_days(self, *, employee_id: str, start: date, end: date) -> int:
        raise NotImplementedError
