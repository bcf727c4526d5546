from datetime import datetime

from src.shift_ledger.shift_ledger.attendance.factory import AttendanceStrategyFactory
from src.shift_ledger.shift_ledger.attendance.strategies.early_strategy import EarlyLeaveStrategy
from src.shift_ledger.shift_ledger.attendance.strategies.late_strategy import LateStrategy
from src.shift_ledger.shift_ledger.attendance.strategies.normal_strategy import NormalStrategy
from src.shift_ledger.shift_ledger.attendance.strategies.overtime_strategy import OvertimeStrategy

PLANNED_START = datetime(2026, 2, 1, 9, 0)
PLANNED_END = datetime(2026, 2, 1, 18, 0)


def test_factory_checkin_exactly_on_time_is_normal():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkin(check_in=PLANNED_START, planned_start=PLANNED_START)

    assert isinstance(strategy, NormalStrategy)


def test_factory_checkin_after_start_is_late():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkin(check_in=datetime(2026, 2, 1, 9, 0, 30), planned_start=PLANNED_START)

    assert isinstance(strategy, LateStrategy)


def test_factory_checkout_inside_tolerance_band_is_normal():
    factory = AttendanceStrategyFactory()

    for minute in (0, 30, 59):
        assert isinstance(
            factory.for_checkout(check_out=datetime(2026, 2, 1, 17, minute), planned_end=PLANNED_END), NormalStrategy
        )
    assert isinstance(factory.for_checkout(check_out=datetime(2026, 2, 1, 19, 0), planned_end=PLANNED_END), NormalStrategy)


def test_factory_checkout_outside_band():
    factory = AttendanceStrategyFactory()

    assert isinstance(
        factory.for_checkout(check_out=datetime(2026, 2, 1, 16, 59), planned_end=PLANNED_END), EarlyLeaveStrategy
    )
    assert isinstance(
        factory.for_checkout(check_out=datetime(2026, 2, 1, 19, 1), planned_end=PLANNED_END), OvertimeStrategy
    )


def test_factory_custom_tolerance():
    factory = AttendanceStrategyFactory(tolerance_minutes=15)
    strategy = factory.for_checkout(check_out=datetime(2026, 2, 1, 17, 30), planned_end=PLANNED_END)

    assert isinstance(strategy, EarlyLeaveStrategy)
