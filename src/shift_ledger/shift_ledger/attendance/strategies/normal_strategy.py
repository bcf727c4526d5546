from __future__ import annotations

from datetime import datetime

from .base import AttendanceStrategy, SlotMeasure


class NormalStrategy(AttendanceStrategy):
    """On-time check-in, check-out inside the tolerance band."""

    def measure_checkin(self, *, check_in: datetime, planned_start: datetime) -> SlotMeasure:
        return SlotMeasure()

    def measure_checkout(self, *, check_out: datetime, planned_end: datetime) -> SlotMeasure:
        return SlotMeasure()
