from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from ..core.enums import DayType
from .model import CalendarException


class DayTypeRepository(Protocol):
    def get_day_type(self, work_date: date) -> DayType:
        """Dates without an exception row are ``DayType.OPEN``."""

        raise NotImplementedError

    def list_range(self, *, start: date, end: date) -> Sequence[CalendarException]:
        raise NotImplementedError
