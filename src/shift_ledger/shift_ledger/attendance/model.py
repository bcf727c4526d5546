from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Optional

from ..core.enums import ShiftSlot, StampAction, StampSource


@dataclass(frozen=True)
class SlotRecord:
    """One shift slot of an attendance day: stamps, the plan copied at stamp time, derived minutes."""

    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    check_in_source: Optional[StampSource] = None
    check_out_source: Optional[StampSource] = None
    planned_start: Optional[datetime] = None
    planned_end: Optional[datetime] = None
    has_schedule: bool = False
    late_minutes: int = 0
    early_minutes: int = 0
    overtime_minutes: int = 0
    # Check-out written before any check-in through an admin/makeup stamp.
    out_of_order: bool = False

    def value_for(self, action: StampAction) -> Optional[datetime]:
        return self.check_in if action == StampAction.CHECK_IN else self.check_out

    @property
    def has_punches(self) -> bool:
        return self.check_in is not None or self.check_out is not None


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar date."""

    employee_id: str
    work_date: date
    morning: SlotRecord = field(default_factory=SlotRecord)
    night: SlotRecord = field(default_factory=SlotRecord)
    updated_at: Optional[datetime] = None

    @classmethod
    def skeleton(cls, employee_id: str, work_date: date) -> "AttendanceRecord":
        return cls(employee_id=employee_id, work_date=work_date)

    def slot(self, shift: ShiftSlot) -> SlotRecord:
        return self.morning if shift == ShiftSlot.MORNING else self.night

    def with_slot(self, shift: ShiftSlot, slot: SlotRecord, *, updated_at: Optional[datetime] = None) -> "AttendanceRecord":
        key = "morning" if shift == ShiftSlot.MORNING else "night"
        return replace(self, **{key: slot}, updated_at=updated_at or self.updated_at)

    @property
    def has_punches(self) -> bool:
        return self.morning.has_punches or self.night.has_punches

    @property
    def late_minutes(self) -> int:
        return self.morning.late_minutes + self.night.late_minutes

    @property
    def early_minutes(self) -> int:
        return self.morning.early_minutes + self.night.early_minutes

    @property
    def overtime_minutes(self) -> int:
        return self.morning.overtime_minutes + self.night.overtime_minutes
