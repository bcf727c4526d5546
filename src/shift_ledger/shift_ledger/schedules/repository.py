from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import ShiftSlot
from .model import PlannedShift


class ScheduleRepository(Protocol):
    """Read-only schedule provider; this package never writes schedules."""

    def get_schedule(self, *, employee_id: str, work_date: date, shift: ShiftSlot) -> Optional[PlannedShift]:
        raise NotImplementedError

    def list_range(self, *, employee_id: str, start: date, end: date) -> Sequence[PlannedShift]:
        """All planned shifts of an employee between start and end (inclusive)."""

        raise NotImplementedError
