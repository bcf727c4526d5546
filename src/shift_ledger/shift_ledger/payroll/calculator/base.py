from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def per_minute_rate(self, gross_salary: int) -> Decimal:
        raise NotImplementedError

    @abstractmethod
    def late_deduction(self, gross_salary: int, late_minutes: int) -> int:
        raise NotImplementedError
