from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class DaySummary:
    work_date: date
    scheduled: bool
    has_punches: bool
    late_minutes: int = 0
    early_minutes: int = 0
    overtime_minutes: int = 0


@dataclass(frozen=True)
class MonthlySummary:
    """Derived per query; never persisted."""

    employee_id: str
    year_month: str
    attendance_days: int = 0
    late_count: int = 0
    late_minutes: int = 0
    early_minutes: int = 0
    overtime_minutes: int = 0
    approved_makeup_count: int = 0
    missing_schedule_days: int = 0
    personal_leave_days: int = 0
    full_attendance_broken: bool = False
    broken_reason: Optional[str] = None
    late_deduct_minutes: int = 0
    days: list[DaySummary] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "year_month": self.year_month,
            "attendance_days": self.attendance_days,
            "late_count": self.late_count,
            "late_minutes": self.late_minutes,
            "early_minutes": self.early_minutes,
            "overtime_minutes": self.overtime_minutes,
            "approved_makeup_count": self.approved_makeup_count,
            "missing_schedule_days": self.missing_schedule_days,
            "personal_leave_days": self.personal_leave_days,
            "full_attendance_broken": self.full_attendance_broken,
            "broken_reason": self.broken_reason,
            "late_deduct_minutes": self.late_deduct_minutes,
        }
