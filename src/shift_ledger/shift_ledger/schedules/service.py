from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import combine_span
from ..core.enums import DayType, ShiftSlot
from ..core.exceptions import BadSchedule, MissingSchedule
from .day_type_repository import DayTypeRepository
from .repository import ScheduleRepository

logger = logging.getLogger(__name__)


class ScheduleService:
    """Read-side access to planned shifts and the calendar of closures."""

    def __init__(self, schedules: ScheduleRepository, day_types: Optional[DayTypeRepository] = None):
        self._schedules = schedules
        self._day_types = day_types

    def planned_span(self, *, employee_id: str, work_date: date, shift: ShiftSlot) -> tuple[datetime, datetime]:
        """Planned start/end instants for a slot.

        Raises MissingSchedule when nothing is planned and BadSchedule when the
        entry cannot be turned into a usable span.
        """

        planned = self._schedules.get_schedule(employee_id=employee_id, work_date=work_date, shift=shift)
        if planned is None:
            raise MissingSchedule(f"No {shift.value} schedule for {employee_id} on {work_date}")
        if planned.start_time is None or planned.end_time is None:
            raise BadSchedule(f"Incomplete {shift.value} schedule for {employee_id} on {work_date}")
        if planned.start_time == planned.end_time:
            raise BadSchedule(f"Zero-length {shift.value} schedule for {employee_id} on {work_date}")
        return combine_span(work_date, planned.start_time, planned.end_time)

    def try_planned_span(
        self, *, employee_id: str, work_date: date, shift: ShiftSlot
    ) -> Optional[tuple[datetime, datetime]]:
        """Like planned_span, but missing or malformed plans come back as None."""

        try:
            return self.planned_span(employee_id=employee_id, work_date=work_date, shift=shift)
        except MissingSchedule:
            return None
        except BadSchedule as e:
            logger.warning("Ignoring schedule: %s", e)
            return None

    def day_type(self, work_date: date) -> DayType:
        if self._day_types is None:
            return DayType.OPEN
        return self._day_types.get_day_type(work_date)

    def month_plans(
        self, *, employee_id: str, start: date, end: date
    ) -> dict[tuple[date, ShiftSlot], Optional[tuple[datetime, datetime]]]:
        """Every planned slot in [start, end]; malformed entries map to None."""

        plans: dict[tuple[date, ShiftSlot], Optional[tuple[datetime, datetime]]] = {}
        for planned in self._schedules.list_range(employee_id=employee_id, start=start, end=end):
            span = None
            if planned.start_time is not None and planned.end_time is not None and planned.start_time != planned.end_time:
                span = combine_span(planned.work_date, planned.start_time, planned.end_time)
            else:
                logger.warning("Ignoring malformed %s schedule for %s on %s", planned.shift.value, employee_id, planned.work_date)
            plans[(planned.work_date, planned.shift)] = span
        return plans

    def closed_days(self, *, start: date, end: date) -> set[date]:
        if self._day_types is None:
            return set()
        return {
            exc.work_date
            for exc in self._day_types.list_range(start=start, end=end)
            if exc.day_type == DayType.CLOSED
        }
