from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SlotMeasure:
    late_minutes: int = 0
    early_minutes: int = 0
    overtime_minutes: int = 0


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how a stamp is measured against its plan."""

    @abstractmethod
    def measure_checkin(self, *, check_in: datetime, planned_start: datetime) -> SlotMeasure:
        raise NotImplementedError

    @abstractmethod
    def measure_checkout(self, *, check_out: datetime, planned_end: datetime) -> SlotMeasure:
        raise NotImplementedError
