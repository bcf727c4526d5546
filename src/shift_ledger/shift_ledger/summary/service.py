from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..attendance.service import AttendanceLedger
from ..common.datetime_utils import iter_month_dates, month_bounds, now_local
from ..core.enums import ShiftSlot
from ..requests.service import MakeupWorkflow
from ..schedules.service import ScheduleService
from .leave_repository import LeaveRepository
from .model import DaySummary, MonthlySummary
from .rules import evaluate_full_attendance

logger = logging.getLogger(__name__)


class MonthlySummaryService:
    """Walks one employee's month and derives lateness totals and the full-attendance verdict.

    Read-only: records are scored as stored, except that a punched slot that
    never received a plan is scored against the schedule as it is now.
    """

    def __init__(
        self,
        ledger: AttendanceLedger,
        schedules: ScheduleService,
        workflow: MakeupWorkflow,
        *,
        leaves: Optional[LeaveRepository] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._ledger = ledger
        self._schedules = schedules
        self._workflow = workflow
        self._leaves = leaves
        self._clock = clock

    def summarize(self, employee_id: str, year_month: str) -> MonthlySummary:
        start, end = month_bounds(year_month)
        today = self._clock().date()

        records = {r.work_date: r for r in self._ledger.list_month(employee_id, year_month)}
        plans = self._schedules.month_plans(employee_id=employee_id, start=start, end=end)
        closed = self._schedules.closed_days(start=start, end=end)

        attendance_days = late_count = missing_schedule_days = 0
        late_total = early_total = overtime_total = 0
        days: list[DaySummary] = []

        for work_date in iter_month_dates(year_month):
            if work_date in closed:
                continue
            record = records.get(work_date)
            has_punches = bool(record and record.has_punches)
            # Days still ahead have no obligation yet.
            if work_date > today and not has_punches:
                continue
            if has_punches:
                attendance_days += 1

            scheduled = any((work_date, shift) in plans for shift in ShiftSlot) or bool(
                record and any(record.slot(shift).has_schedule for shift in ShiftSlot)
            )
            if not scheduled:
                missing_schedule_days += 1
                days.append(DaySummary(work_date=work_date, scheduled=False, has_punches=has_punches))
                continue

            late = early = overtime = 0
            if record is not None:
                for shift in ShiftSlot:
                    slot = record.slot(shift)
                    if not slot.has_schedule and slot.has_punches and plans.get((work_date, shift)):
                        slot = self._ledger.restat_slot(slot, plans[(work_date, shift)])
                    late += slot.late_minutes
                    early += slot.early_minutes
                    overtime += slot.overtime_minutes

            if late > 0:
                late_count += 1
            late_total += late
            early_total += early
            overtime_total += overtime
            days.append(
                DaySummary(
                    work_date=work_date,
                    scheduled=True,
                    has_punches=has_punches,
                    late_minutes=late,
                    early_minutes=early,
                    overtime_minutes=overtime,
                )
            )

        approved_makeups = self._workflow.count_approved(employee_id, year_month)
        leave_days = (
            self._leaves.personal_leave_days(employee_id=employee_id, start=start, end=end) if self._leaves else 0
        )

        verdict = evaluate_full_attendance(
            late_count=late_count,
            late_minutes=late_total,
            approved_makeup_count=approved_makeups,
            personal_leave_days=leave_days,
        )
        if verdict.broken:
            logger.info("Full attendance broken for %s in %s: %s", employee_id, year_month, verdict.reason)

        return MonthlySummary(
            employee_id=employee_id,
            year_month=year_month,
            attendance_days=attendance_days,
            late_count=late_count,
            late_minutes=late_total,
            early_minutes=early_total,
            overtime_minutes=overtime_total,
            approved_makeup_count=approved_makeups,
            missing_schedule_days=missing_schedule_days,
            personal_leave_days=leave_days,
            full_attendance_broken=verdict.broken,
            broken_reason=verdict.reason,
            late_deduct_minutes=late_total if verdict.broken_by_lateness else 0,
            days=days,
        )
