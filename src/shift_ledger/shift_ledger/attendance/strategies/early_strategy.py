from __future__ import annotations

from datetime import datetime

from ...common.datetime_utils import minutes_between
from .base import AttendanceStrategy, SlotMeasure


class EarlyLeaveStrategy(AttendanceStrategy):
    """Check-out before the tolerance band opens."""

    def measure_checkin(self, *, check_in: datetime, planned_start: datetime) -> SlotMeasure:
        return SlotMeasure()

    def measure_checkout(self, *, check_out: datetime, planned_end: datetime) -> SlotMeasure:
        return SlotMeasure(early_minutes=minutes_between(check_out, planned_end))
