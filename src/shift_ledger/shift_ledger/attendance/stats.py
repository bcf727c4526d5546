from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .factory import AttendanceStrategyFactory


@dataclass(frozen=True)
class ShiftStats:
    has_schedule: bool
    late_minutes: int = 0
    early_minutes: int = 0
    overtime_minutes: int = 0


def compute_shift_stats(
    planned_start: Optional[datetime],
    planned_end: Optional[datetime],
    check_in: Optional[datetime],
    check_out: Optional[datetime],
    *,
    factory: Optional[AttendanceStrategyFactory] = None,
) -> ShiftStats:
    """Late/early/overtime minutes of one shift slot.

    Without a plan nothing can be judged and every metric is 0. A missing
    stamp contributes 0 to the metric it would have produced.
    """

    if planned_start is None or planned_end is None:
        return ShiftStats(has_schedule=False)

    factory = factory or AttendanceStrategyFactory()
    late = early = overtime = 0

    if check_in is not None:
        strategy = factory.for_checkin(check_in=check_in, planned_start=planned_start)
        late = strategy.measure_checkin(check_in=check_in, planned_start=planned_start).late_minutes

    if check_out is not None:
        strategy = factory.for_checkout(check_out=check_out, planned_end=planned_end)
        measure = strategy.measure_checkout(check_out=check_out, planned_end=planned_end)
        early = measure.early_minutes
        overtime = measure.overtime_minutes

    return ShiftStats(has_schedule=True, late_minutes=late, early_minutes=early, overtime_minutes=overtime)
