from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import (
    FULL_ATTENDANCE_MAX_LATE_COUNT,
    FULL_ATTENDANCE_MAX_LATE_MINUTES,
    FULL_ATTENDANCE_MAX_MAKEUPS,
)


@dataclass(frozen=True)
class FullAttendanceVerdict:
    broken: bool
    reason: Optional[str] = None
    # Either lateness rule fired; drives the all-or-nothing late deduction.
    broken_by_lateness: bool = False


def evaluate_full_attendance(
    *,
    late_count: int,
    late_minutes: int,
    approved_makeup_count: int,
    personal_leave_days: int = 0,
) -> FullAttendanceVerdict:
    """Full-attendance breakage.

    Rules are checked in a fixed order; the first one that holds explains the
    verdict, the verdict itself is the OR of all of them.
    """

    by_count = late_count > FULL_ATTENDANCE_MAX_LATE_COUNT
    by_minutes = late_count <= FULL_ATTENDANCE_MAX_LATE_COUNT and late_minutes > FULL_ATTENDANCE_MAX_LATE_MINUTES
    by_makeups = approved_makeup_count > FULL_ATTENDANCE_MAX_MAKEUPS
    by_leave = personal_leave_days > 0

    reasons = [
        (by_count, f"Late {late_count} times (more than {FULL_ATTENDANCE_MAX_LATE_COUNT})"),
        (by_minutes, f"Late {late_minutes} minutes in total (more than {FULL_ATTENDANCE_MAX_LATE_MINUTES})"),
        (by_makeups, f"{approved_makeup_count} approved makeups (more than {FULL_ATTENDANCE_MAX_MAKEUPS})"),
        (by_leave, f"{personal_leave_days} personal leave day(s)"),
    ]
    reason = next((text for fired, text in reasons if fired), None)
    return FullAttendanceVerdict(
        broken=reason is not None,
        reason=reason,
        broken_by_lateness=by_count or by_minutes,
    )
