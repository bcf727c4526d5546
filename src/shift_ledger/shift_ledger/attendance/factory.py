from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from ..core.constants import CHECKOUT_TOLERANCE_MINUTES
from .strategies.base import AttendanceStrategy
from .strategies.early_strategy import EarlyLeaveStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy
from .strategies.overtime_strategy import OvertimeStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    tolerance_minutes: int = CHECKOUT_TOLERANCE_MINUTES

    def for_checkin(self, *, check_in: datetime, planned_start: datetime) -> AttendanceStrategy:
        if check_in <= planned_start:
            return NormalStrategy()
        return LateStrategy()

    def for_checkout(self, *, check_out: datetime, planned_end: datetime) -> AttendanceStrategy:
        band = timedelta(minutes=self.tolerance_minutes)
        if check_out > planned_end + band:
            return OvertimeStrategy()
        if check_out < planned_end - band:
            return EarlyLeaveStrategy()
        return NormalStrategy()
