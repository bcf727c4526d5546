from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ...core.constants import MONTHLY_DIVISOR_DAYS, STANDARD_DAILY_MINUTES
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: gross / 30 days / 540 minutes per minute, deduction rounded half up."""

    def __init__(self, *, divisor_days: int = MONTHLY_DIVISOR_DAYS, daily_minutes: int = STANDARD_DAILY_MINUTES):
        self._minutes_per_month = Decimal(int(divisor_days) * int(daily_minutes))

    def per_minute_rate(self, gross_salary: int) -> Decimal:
        return Decimal(int(gross_salary)) / self._minutes_per_month

    def late_deduction(self, gross_salary: int, late_minutes: int) -> int:
        if late_minutes <= 0:
            return 0
        # Multiply before dividing so the rate's repeating decimals don't drift the rounding.
        amount = Decimal(int(gross_salary)) * Decimal(int(late_minutes)) / self._minutes_per_month
        return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
