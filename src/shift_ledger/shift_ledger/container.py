from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceLedger
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .common.datetime_utils import now_local
from .core.constants import DEFAULT_TX_MAX_RETRIES
from .database.connection import DBConfig, DatabaseConnection
from .database.mysql_base import MySQLTransactionManager
from .database.transaction import TransactionManager
from .dialogs.mysql_session_repository import MySQLSessionRepository
from .dialogs.repository import SessionRepository
from .dialogs.service import MakeupDialogService
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import IdentityResolver
from .notifications.notifier import LoggingNotifier, Notifier
from .payroll.service import PayrollEstimator
from .requests.mysql_request_repository import MySQLRequestRepository
from .requests.repository import RequestRepository
from .requests.service import MakeupWorkflow
from .schedules.day_type_repository import DayTypeRepository
from .schedules.mysql_day_type_repository import MySQLDayTypeRepository
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.repository import ScheduleRepository
from .schedules.service import ScheduleService
from .summary.leave_repository import LeaveRepository
from .summary.mysql_leave_repository import MySQLLeaveRepository
from .summary.service import MonthlySummaryService


@dataclass(frozen=True)
class Container:
    identity_resolver: IdentityResolver
    schedule_service: ScheduleService
    ledger: AttendanceLedger
    makeup_workflow: MakeupWorkflow
    summary_service: MonthlySummaryService
    payroll_estimator: PayrollEstimator
    makeup_dialog: MakeupDialogService
    clock: Callable[[], datetime] = now_local


def build_services(
    *,
    employees: EmployeeRepository,
    attendance: AttendanceRepository,
    schedules: ScheduleRepository,
    requests: RequestRepository,
    sessions: SessionRepository,
    transactions: TransactionManager,
    day_types: Optional[DayTypeRepository] = None,
    leaves: Optional[LeaveRepository] = None,
    notifier: Optional[Notifier] = None,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    """Wire services over any set of repositories (MySQL in production, fakes in tests)."""

    identity_resolver = IdentityResolver(employees)
    schedule_service = ScheduleService(schedules, day_types)
    ledger = AttendanceLedger(attendance, schedule_service, transactions, clock=clock)
    makeup_workflow = MakeupWorkflow(
        requests,
        ledger,
        transactions,
        identities=identity_resolver,
        notifier=notifier or LoggingNotifier(),
        clock=clock,
    )
    summary_service = MonthlySummaryService(ledger, schedule_service, makeup_workflow, leaves=leaves, clock=clock)
    payroll_estimator = PayrollEstimator(summary_service, identity_resolver)
    makeup_dialog = MakeupDialogService(sessions, makeup_workflow)

    return Container(
        identity_resolver=identity_resolver,
        schedule_service=schedule_service,
        ledger=ledger,
        makeup_workflow=makeup_workflow,
        summary_service=summary_service,
        payroll_estimator=payroll_estimator,
        makeup_dialog=makeup_dialog,
        clock=clock,
    )


def build_container(*, db_config: dict, tx_max_retries: int = DEFAULT_TX_MAX_RETRIES) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return build_services(
        employees=MySQLEmployeeRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
        schedules=MySQLScheduleRepository(conn),
        requests=MySQLRequestRepository(conn),
        sessions=MySQLSessionRepository(conn),
        transactions=MySQLTransactionManager(conn, max_retries=tx_max_retries),
        day_types=MySQLDayTypeRepository(conn),
        leaves=MySQLLeaveRepository(conn),
    )
