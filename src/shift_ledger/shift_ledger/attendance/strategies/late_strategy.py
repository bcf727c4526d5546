from __future__ import annotations

from datetime import datetime

from ...common.datetime_utils import minutes_between
from .base import AttendanceStrategy, SlotMeasure


class LateStrategy(AttendanceStrategy):
    """Late check-in."""

    def measure_checkin(self, *, check_in: datetime, planned_start: datetime) -> SlotMeasure:
        return SlotMeasure(late_minutes=max(0, minutes_between(planned_start, check_in)))

    def measure_checkout(self, *, check_out: datetime, planned_end: datetime) -> SlotMeasure:
        return SlotMeasure()
