from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.enums import DayType, ShiftSlot


@dataclass(frozen=True)
class PlannedShift:
    employee_id: str
    work_date: date
    shift: ShiftSlot
    start_time: Optional[time]
    end_time: Optional[time]


@dataclass(frozen=True)
class CalendarException:
    """A date whose attendance obligation differs from a normal open day."""

    work_date: date
    day_type: DayType
    note: Optional[str] = None
