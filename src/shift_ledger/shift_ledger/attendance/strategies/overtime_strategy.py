from __future__ import annotations

from datetime import datetime

from ...common.datetime_utils import minutes_between
from .base import AttendanceStrategy, SlotMeasure


class OvertimeStrategy(AttendanceStrategy):
    """Check-out after the tolerance band closes; the whole stay past plan counts."""

    def measure_checkin(self, *, check_in: datetime, planned_start: datetime) -> SlotMeasure:
        return SlotMeasure()

    def measure_checkout(self, *, check_out: datetime, planned_end: datetime) -> SlotMeasure:
        return SlotMeasure(overtime_minutes=minutes_between(planned_end, check_out))
