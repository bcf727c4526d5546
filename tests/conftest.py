from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from datetime import date, datetime, time
from typing import Optional

import pytest

from src.shift_ledger.shift_ledger.attendance.model import AttendanceRecord
from src.shift_ledger.shift_ledger.container import Container, build_services
from src.shift_ledger.shift_ledger.core.enums import DayType, RequestStatus, Role, ShiftSlot
from src.shift_ledger.shift_ledger.employees.model import Employee, Identity
from src.shift_ledger.shift_ledger.notifications.notifier import Notifier
from src.shift_ledger.shift_ledger.requests.model import MakeupRequest
from src.shift_ledger.shift_ledger.schedules.model import CalendarException, PlannedShift


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class FakeTx:
    """Writes are buffered and only applied when the unit of work returns."""

    def __init__(self):
        self._pending = []

    def on_commit(self, fn) -> None:
        self._pending.append(fn)

    def commit(self) -> None:
        for fn in self._pending:
            fn()


class InMemoryTransactions:
    def __init__(self):
        self._lock = threading.RLock()
        self.runs = 0

    def run(self, work):
        with self._lock:
            self.runs += 1
            tx = FakeTx()
            result = work(tx)
            tx.commit()
            return result


class InMemoryEmployees:
    def __init__(self, employees):
        self._by_id = {e.employee_id: e for e in employees}

    def get_by_user_id(self, user_id: str) -> Optional[Employee]:
        return next((e for e in self._by_id.values() if e.user_id == user_id), None)

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def list_by_role(self, role):
        return [e for e in self._by_id.values() if e.role == role and e.is_active]


class InMemoryAttendance:
    def __init__(self):
        self.records: dict[tuple[str, date], AttendanceRecord] = {}

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        return self.records.get((employee_id, work_date))

    def list_range(self, *, employee_id: str, start: date, end: date):
        items = [r for (eid, d), r in self.records.items() if eid == employee_id and start <= d <= end]
        return sorted(items, key=lambda r: r.work_date)

    def lock_for_update(self, tx, *, employee_id: str, work_date: date) -> AttendanceRecord:
        return self.records.get((employee_id, work_date)) or AttendanceRecord.skeleton(employee_id, work_date)

    def save(self, tx, record: AttendanceRecord) -> None:
        tx.on_commit(lambda: self.records.__setitem__((record.employee_id, record.work_date), record))


class InMemorySchedules:
    def __init__(self):
        self.plans: dict[tuple[str, date, ShiftSlot], PlannedShift] = {}

    def add(self, employee_id: str, work_date: date, shift: ShiftSlot, start: Optional[time], end: Optional[time]):
        self.plans[(employee_id, work_date, shift)] = PlannedShift(
            employee_id=employee_id, work_date=work_date, shift=shift, start_time=start, end_time=end
        )

    def get_schedule(self, *, employee_id: str, work_date: date, shift: ShiftSlot) -> Optional[PlannedShift]:
        return self.plans.get((employee_id, work_date, shift))

    def list_range(self, *, employee_id: str, start: date, end: date):
        return [p for (eid, d, _), p in sorted(self.plans.items()) if eid == employee_id and start <= d <= end]


class InMemoryDayTypes:
    def __init__(self):
        self.days: dict[date, DayType] = {}

    def get_day_type(self, work_date: date) -> DayType:
        return self.days.get(work_date, DayType.OPEN)

    def list_range(self, *, start: date, end: date):
        return [
            CalendarException(work_date=d, day_type=t)
            for d, t in sorted(self.days.items())
            if start <= d <= end
        ]


class InMemoryRequests:
    def __init__(self):
        self._next_id = 1
        self.items: dict[int, MakeupRequest] = {}

    def create(self, *, employee_id, requested_by, work_date, shift, action, reason, created_at) -> int:
        rid = self._next_id
        self._next_id += 1
        self.items[rid] = MakeupRequest(
            request_id=rid,
            employee_id=employee_id,
            requested_by=requested_by,
            work_date=work_date,
            shift=shift,
            action=action,
            reason=reason,
            status=RequestStatus.PENDING,
            created_at=created_at,
        )
        return rid

    def get(self, *, request_id: int) -> Optional[MakeupRequest]:
        return self.items.get(int(request_id))

    def lock_for_update(self, tx, *, request_id: int) -> Optional[MakeupRequest]:
        return self.items.get(int(request_id))

    def save_decision(self, tx, *, request_id, status, reviewed_by, reviewed_at, review_note=None, stamped_at=None):
        def apply():
            self.items[int(request_id)] = replace(
                self.items[int(request_id)],
                status=status,
                reviewed_by=reviewed_by,
                reviewed_at=reviewed_at,
                review_note=review_note,
                stamped_at=stamped_at,
            )

        tx.on_commit(apply)

    def list_requests(self, *, status=None, employee_id=None, limit=200):
        items = [
            r
            for r in self.items.values()
            if (status is None or r.status == status) and (employee_id is None or r.employee_id == employee_id)
        ]
        items.sort(key=lambda r: (r.created_at, r.request_id))
        return items[: int(limit)]

    def count_approved_between(self, *, employee_id: str, start: date, end: date) -> int:
        return sum(
            1
            for r in self.items.values()
            if r.employee_id == employee_id and r.status == RequestStatus.APPROVED and start <= r.work_date <= end
        )


class InMemorySessions:
    def __init__(self):
        self.data: dict[str, dict] = {}

    def get(self, user_id: str) -> Optional[dict]:
        return self.data.get(user_id)

    def set(self, user_id: str, data: dict) -> None:
        self.data[user_id] = dict(data)

    def delete(self, user_id: str) -> None:
        self.data.pop(user_id, None)


class InMemoryLeaves:
    def __init__(self):
        self.days: dict[str, set[date]] = {}

    def personal_leave_days(self, *, employee_id: str, start: date, end: date) -> int:
        return sum(1 for d in self.days.get(employee_id, set()) if start <= d <= end)


class RecordingNotifier(Notifier):
    def __init__(self, *, fail: bool = False):
        self.sent: list[tuple[list, dict]] = []
        self._fail = fail

    def notify(self, recipients, payload: dict) -> None:
        if self._fail:
            raise ConnectionError("push endpoint unavailable")
        self.sent.append((list(recipients), payload))


ALICE = Employee(employee_id="E001", user_id="U-alice", name="Alice", role=Role.STAFF, base_salary=30000, position_allowance=2000)
BOB = Employee(employee_id="E002", user_id="U-bob", name="Bob", role=Role.ADMIN, base_salary=40000)
CAROL = Employee(employee_id="E003", user_id="U-carol", name="Carol", role=Role.ADMIN, base_salary=40000)
DAVE = Employee(employee_id="E004", user_id="U-dave", name="Dave", role=Role.STAFF, base_salary=28000)


def identity_of(employee: Employee) -> Identity:
    return Identity(user_id=employee.user_id, employee_id=employee.employee_id, role=employee.role)


@dataclass
class Env:
    clock: FakeClock
    transactions: InMemoryTransactions
    employees: InMemoryEmployees
    attendance: InMemoryAttendance
    schedules: InMemorySchedules
    day_types: InMemoryDayTypes
    requests: InMemoryRequests
    sessions: InMemorySessions
    leaves: InMemoryLeaves
    notifier: RecordingNotifier
    container: Container = field(init=False)

    def __post_init__(self):
        self.container = build_services(
            employees=self.employees,
            attendance=self.attendance,
            schedules=self.schedules,
            requests=self.requests,
            sessions=self.sessions,
            transactions=self.transactions,
            day_types=self.day_types,
            leaves=self.leaves,
            notifier=self.notifier,
            clock=self.clock,
        )


@pytest.fixture
def env() -> Env:
    return Env(
        clock=FakeClock(datetime(2026, 2, 10, 9, 0)),
        transactions=InMemoryTransactions(),
        employees=InMemoryEmployees([ALICE, BOB, CAROL, DAVE]),
        attendance=InMemoryAttendance(),
        schedules=InMemorySchedules(),
        day_types=InMemoryDayTypes(),
        requests=InMemoryRequests(),
        sessions=InMemorySessions(),
        leaves=InMemoryLeaves(),
        notifier=RecordingNotifier(),
    )


@pytest.fixture
def alice() -> Identity:
    return identity_of(ALICE)


@pytest.fixture
def bob() -> Identity:
    return identity_of(BOB)


@pytest.fixture
def carol() -> Identity:
    return identity_of(CAROL)
