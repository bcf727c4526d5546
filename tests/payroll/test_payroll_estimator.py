from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal

import pytest

from src.shift_ledger.shift_ledger.core.enums import ShiftSlot, StampAction, StampSource
from src.shift_ledger.shift_ledger.core.exceptions import NotFound
from src.shift_ledger.shift_ledger.payroll.model import SalaryComponents
from src.shift_ledger.shift_ledger.payroll.service import PayrollEstimator
from src.shift_ledger.shift_ledger.summary.model import MonthlySummary


def test_estimate_subtracts_late_deduction():
    summary = MonthlySummary(employee_id="E001", year_month="2026-02", late_minutes=15, late_deduct_minutes=15)

    estimate = PayrollEstimator().estimate(SalaryComponents(base_salary=30000, position_allowance=2000), summary)

    assert estimate.gross_salary == 32000
    assert estimate.late_deduction == 30
    assert estimate.net_pay == 31970
    assert estimate.to_dict()["per_minute_rate"] == str(
        (Decimal(32000) / Decimal(16200)).quantize(Decimal("0.0001"))
    )


def test_estimate_without_breakage_pays_gross():
    summary = MonthlySummary(employee_id="E001", year_month="2026-02", late_minutes=8, late_deduct_minutes=0)

    estimate = PayrollEstimator().estimate(SalaryComponents(base_salary=32000), summary)

    assert estimate.late_deduction == 0
    assert estimate.net_pay == 32000


def test_estimate_for_employee_reads_salary_and_summary(env):
    for day in (2, 3, 4):
        env.schedules.add("E001", date(2026, 2, day), ShiftSlot.MORNING, time(9, 0), time(18, 0))
        env.container.ledger.stamp(
            "E001",
            date(2026, 2, day),
            ShiftSlot.MORNING,
            StampAction.CHECK_IN,
            source=StampSource.ADMIN,
            at=datetime(2026, 2, day, 9, 5),
        )

    estimate = env.container.payroll_estimator.estimate_for_employee("E001", "2026-02")

    assert estimate.late_deduct_minutes == 15
    assert estimate.gross_salary == 32000
    assert estimate.net_pay == 31970


def test_estimate_for_unknown_employee(env):
    with pytest.raises(NotFound):
        env.container.payroll_estimator.estimate_for_employee("E999", "2026-02")
