from __future__ import annotations

from typing import Optional

from ..employees.service import IdentityResolver
from ..summary.model import MonthlySummary
from ..summary.service import MonthlySummaryService
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollEstimate, SalaryComponents


class PayrollEstimator:
    """Net pay estimate: a flat monthly rate less the late deduction.

    No overtime or leave pay; those categories do not exist here.
    """

    def __init__(
        self,
        summaries: Optional[MonthlySummaryService] = None,
        identities: Optional[IdentityResolver] = None,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._summaries = summaries
        self._identities = identities
        self._calculator = calculator or StandardPayrollCalculator()

    def estimate(self, components: SalaryComponents, summary: MonthlySummary) -> PayrollEstimate:
        gross = components.gross
        deduction = self._calculator.late_deduction(gross, summary.late_deduct_minutes)
        return PayrollEstimate(
            employee_id=summary.employee_id,
            year_month=summary.year_month,
            gross_salary=gross,
            per_minute_rate=self._calculator.per_minute_rate(gross),
            late_deduct_minutes=summary.late_deduct_minutes,
            late_deduction=deduction,
            net_pay=gross - deduction,
        )

    def estimate_for_employee(self, employee_id: str, year_month: str) -> PayrollEstimate:
        if self._summaries is None or self._identities is None:
            raise RuntimeError("PayrollEstimator needs summaries and identities to load an employee")
        employee = self._identities.employee(employee_id)
        components = SalaryComponents(base_salary=employee.base_salary, position_allowance=employee.position_allowance)
        return self.estimate(components, self._summaries.summarize(employee_id, year_month))
