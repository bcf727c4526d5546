from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Any, Callable, Optional, Sequence

from ..common.datetime_utils import month_bounds, now_local
from ..core.enums import ShiftSlot, StampAction, StampSource
from ..core.exceptions import AlreadyStamped, CheckInRequired, ValidationError
from ..database.transaction import TransactionManager
from ..schedules.service import ScheduleService
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, SlotRecord
from .repository import AttendanceRepository
from .stats import compute_shift_stats

logger = logging.getLogger(__name__)

PlannedSpan = Optional[tuple[datetime, datetime]]


class AttendanceLedger:
    """Owns every write to attendance records.

    Employee punches, administrative corrections and approved makeups all go
    through ``stamp`` (or ``apply_stamp`` inside a caller's transaction), told
    apart only by ``source``.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        schedules: ScheduleService,
        transactions: TransactionManager,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._schedules = schedules
        self._tx = transactions
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._clock = clock

    def stamp(
        self,
        employee_id: str,
        work_date: date,
        shift: ShiftSlot,
        action: StampAction,
        *,
        source: StampSource = StampSource.NORMAL,
        at: datetime | None = None,
        overwrite: bool = False,
    ) -> AttendanceRecord:
        """Write one check-in or check-out.

        Raises AlreadyStamped when the slot already holds a value for the
        action (unless an admin overwrites), CheckInRequired for a normal
        check-out without check-in.
        """

        if at is not None and at.tzinfo is not None:
            raise ValidationError("Stamp time must be local time without a UTC offset")

        now = self._clock()
        self._check_stamp_allowed(work_date, shift, action, source=source, overwrite=overwrite, today=now.date())
        instant = at or now
        plan = self.plan_for(employee_id, work_date, shift)

        record = self._tx.run(
            lambda tx: self.apply_stamp(
                tx,
                employee_id=employee_id,
                work_date=work_date,
                shift=shift,
                action=action,
                source=source,
                instant=instant,
                plan=plan,
                overwrite=overwrite,
            )
        )
        logger.info(
            "Stamped %s %s %s for %s on %s (source=%s)",
            shift.value, action.value, instant.isoformat(), employee_id, work_date, source.value,
        )
        return record

    def plan_for(self, employee_id: str, work_date: date, shift: ShiftSlot) -> PlannedSpan:
        """Planned span to copy onto a slot; resolved before the write transaction opens."""

        return self._schedules.try_planned_span(employee_id=employee_id, work_date=work_date, shift=shift)

    def apply_stamp(
        self,
        tx: Any,
        *,
        employee_id: str,
        work_date: date,
        shift: ShiftSlot,
        action: StampAction,
        source: StampSource,
        instant: datetime,
        plan: PlannedSpan = None,
        overwrite: bool = False,
    ) -> AttendanceRecord:
        """Check-and-set one slot inside an open transaction."""

        current = self._attendance.lock_for_update(tx, employee_id=employee_id, work_date=work_date)
        slot = current.slot(shift)

        existing = slot.value_for(action)
        if existing is not None and not overwrite:
            logger.warning("Duplicate %s %s for %s on %s ignored", shift.value, action.value, employee_id, work_date)
            raise AlreadyStamped(f"{shift.value} {action.value} already recorded at {existing:%H:%M}")

        out_of_order = slot.out_of_order
        if action == StampAction.CHECK_OUT and slot.check_in is None:
            if source == StampSource.NORMAL:
                raise CheckInRequired(f"Check in to the {shift.value} shift before checking out")
            out_of_order = True

        if action == StampAction.CHECK_IN:
            slot = replace(slot, check_in=instant, check_in_source=source)
        else:
            slot = replace(slot, check_out=instant, check_out_source=source)
        slot = replace(slot, out_of_order=out_of_order)

        slot = self._restat(slot, plan)
        updated = current.with_slot(shift, slot, updated_at=self._clock())
        self._attendance.save(tx, updated)
        return updated

    def _restat(self, slot: SlotRecord, plan: PlannedSpan) -> SlotRecord:
        if plan is not None:
            slot = replace(slot, planned_start=plan[0], planned_end=plan[1])
        stats = compute_shift_stats(
            slot.planned_start, slot.planned_end, slot.check_in, slot.check_out, factory=self._factory
        )
        return replace(
            slot,
            has_schedule=stats.has_schedule,
            late_minutes=stats.late_minutes,
            early_minutes=stats.early_minutes,
            overtime_minutes=stats.overtime_minutes,
        )

    def restat_slot(self, slot: SlotRecord, plan: PlannedSpan) -> SlotRecord:
        """Recompute a slot's minutes without persisting; used by read-side reconciliation."""

        return self._restat(slot, plan)

    @staticmethod
    def _check_stamp_allowed(
        work_date: date,
        shift: ShiftSlot,
        action: StampAction,
        *,
        source: StampSource,
        overwrite: bool,
        today: date,
    ) -> None:
        if overwrite and source != StampSource.ADMIN:
            raise ValidationError("Only an administrative stamp may overwrite an existing value")

        if source != StampSource.NORMAL:
            return

        if work_date > today:
            raise ValidationError("Cannot stamp a future date")
        if work_date == today:
            return
        # A night shift may end after midnight.
        if shift == ShiftSlot.NIGHT and action == StampAction.CHECK_OUT and work_date == today - timedelta(days=1):
            return
        raise ValidationError("Past days can only be corrected through a makeup request")

    def get(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_employee_and_date(employee_id, work_date)

    def get_or_empty(self, employee_id: str, work_date: date) -> AttendanceRecord:
        return self.get(employee_id, work_date) or AttendanceRecord.skeleton(employee_id, work_date)

    def list_month(self, employee_id: str, year_month: str) -> Sequence[AttendanceRecord]:
        start, end = month_bounds(year_month)
        return self._attendance.list_range(employee_id=employee_id, start=start, end=end)
