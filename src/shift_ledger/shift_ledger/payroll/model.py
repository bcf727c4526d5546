from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class SalaryComponents:
    base_salary: int
    position_allowance: int = 0

    @property
    def gross(self) -> int:
        return int(self.base_salary) + int(self.position_allowance)


@dataclass(frozen=True)
class PayrollEstimate:
    employee_id: str
    year_month: str
    gross_salary: int
    per_minute_rate: Decimal
    late_deduct_minutes: int
    late_deduction: int
    net_pay: int

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "year_month": self.year_month,
            "gross_salary": self.gross_salary,
            "per_minute_rate": str(self.per_minute_rate.quantize(Decimal("0.0001"))),
            "late_deduct_minutes": self.late_deduct_minutes,
            "late_deduction": self.late_deduction,
            "net_pay": self.net_pay,
        }
