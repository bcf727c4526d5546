from decimal import Decimal

from src.shift_ledger.shift_ledger.payroll.calculator.standard_calculator import StandardPayrollCalculator


def test_per_minute_rate_uses_thirty_days_of_nine_hours():
    calc = StandardPayrollCalculator()

    assert calc.per_minute_rate(16200) == Decimal(1)


def test_late_deduction_rounds_half_up():
    calc = StandardPayrollCalculator()

    # 32000 * 15 / 16200 = 29.63
    assert calc.late_deduction(32000, 15) == 30
    # 8100 * 1 / 16200 = 0.5
    assert calc.late_deduction(8100, 1) == 1


def test_no_late_minutes_no_deduction():
    assert StandardPayrollCalculator().late_deduction(32000, 0) == 0
