from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..attendance.service import AttendanceLedger
from ..common.datetime_utils import month_bounds, now_local
from ..common.validators import require_enum, require_non_empty
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import Decision, RequestStatus, ShiftSlot, StampAction, StampSource
from ..core.exceptions import (
    AlreadyDecided,
    AlreadyStamped,
    AuthorizationError,
    NotFound,
    SelfApproval,
    ValidationError,
)
from ..database.transaction import TransactionManager
from ..employees.model import Identity
from ..employees.service import IdentityResolver
from ..notifications.notifier import Notifier
from .model import MakeupRequest
from .repository import RequestRepository

logger = logging.getLogger(__name__)


class MakeupWorkflow:
    """Makeup requests: pending -> approved | rejected, exactly once.

    Approval writes the ledger stamp and the status in one transaction, so a
    request is never approved without its stamp or stamped twice.
    """

    def __init__(
        self,
        requests: RequestRepository,
        ledger: AttendanceLedger,
        transactions: TransactionManager,
        *,
        identities: Optional[IdentityResolver] = None,
        notifier: Optional[Notifier] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._requests = requests
        self._ledger = ledger
        self._tx = transactions
        self._identities = identities
        self._notifier = notifier
        self._clock = clock

    def submit(
        self,
        requester: Identity,
        *,
        shift: ShiftSlot | str,
        action: StampAction | str,
        reason: str,
        work_date: Optional[date] = None,
    ) -> MakeupRequest:
        shift = require_enum(ShiftSlot, shift, "Shift")
        action = require_enum(StampAction, action, "Action")
        reason = require_non_empty(reason, "Reason")

        now = self._clock()
        work_date = work_date or now.date()
        if work_date > now.date():
            raise ValidationError("Cannot request a makeup for a future date")

        existing = self._ledger.get_or_empty(requester.employee_id, work_date).slot(shift).value_for(action)
        if existing is not None:
            raise AlreadyStamped(f"{shift.value} {action.value} is already recorded at {existing:%H:%M}")

        request_id = self._requests.create(
            employee_id=requester.employee_id,
            requested_by=requester.user_id,
            work_date=work_date,
            shift=shift,
            action=action,
            reason=reason,
            created_at=now,
        )
        request = self.get(request_id)
        logger.info("Makeup request %s submitted by %s", request_id, requester.employee_id)
        self._notify_approvers(request)
        return request

    def _notify_approvers(self, request: MakeupRequest) -> None:
        if self._notifier is None:
            return
        try:
            recipients = self._identities.approvers() if self._identities else []
            self._notifier.notify(recipients, {"event": "makeup_submitted", "request": request.to_payload()})
        except Exception:
            logger.exception("Failed to notify approvers about makeup request %s", request.request_id)

    @staticmethod
    def _check_reviewer(request: MakeupRequest, approver: Identity) -> None:
        if approver.user_id == request.requested_by or approver.employee_id == request.employee_id:
            raise SelfApproval("You cannot review your own makeup request")
        if not approver.is_admin:
            raise AuthorizationError("Only administrators can review makeup requests")

    def decide(
        self,
        request_id: int,
        approver: Identity,
        decision: Decision | str,
        *,
        note: str = "",
    ) -> MakeupRequest:
        decision = require_enum(Decision, decision, "Decision")

        request = self._requests.get(request_id=int(request_id))
        if not request:
            raise NotFound(f"Makeup request {request_id} not found")
        self._check_reviewer(request, approver)

        plan = None
        if decision == Decision.APPROVE:
            plan = self._ledger.plan_for(request.employee_id, request.work_date, request.shift)
        review_note = (note or "").strip() or None

        def work(tx) -> MakeupRequest:
            locked = self._requests.lock_for_update(tx, request_id=int(request_id))
            if not locked:
                raise NotFound(f"Makeup request {request_id} not found")
            self._check_reviewer(locked, approver)
            if not locked.is_pending:
                raise AlreadyDecided(f"Makeup request {request_id} was already {locked.status.value}")

            now = self._clock()
            stamped_at = None
            if decision == Decision.APPROVE:
                # AlreadyStamped aborts the transaction and leaves the request pending.
                self._ledger.apply_stamp(
                    tx,
                    employee_id=locked.employee_id,
                    work_date=locked.work_date,
                    shift=locked.shift,
                    action=locked.action,
                    source=StampSource.MAKEUP,
                    instant=now,
                    plan=plan,
                )
                stamped_at = now
                status = RequestStatus.APPROVED
            else:
                status = RequestStatus.REJECTED

            self._requests.save_decision(
                tx,
                request_id=locked.request_id,
                status=status,
                reviewed_by=approver.user_id,
                reviewed_at=now,
                review_note=review_note,
                stamped_at=stamped_at,
            )
            return replace(
                locked,
                status=status,
                reviewed_by=approver.user_id,
                reviewed_at=now,
                review_note=review_note,
                stamped_at=stamped_at,
            )

        try:
            decided = self._tx.run(work)
        except AlreadyStamped:
            logger.warning("Makeup request %s left pending: target slot already stamped", request_id)
            raise
        logger.info("Makeup request %s %s by %s", request_id, decided.status.value, approver.employee_id)
        return decided

    def approve(self, request_id: int, approver: Identity, *, note: str = "") -> MakeupRequest:
        return self.decide(request_id, approver, Decision.APPROVE, note=note)

    def reject(self, request_id: int, approver: Identity, *, note: str = "") -> MakeupRequest:
        return self.decide(request_id, approver, Decision.REJECT, note=note)

    def get(self, request_id: int) -> MakeupRequest:
        request = self._requests.get(request_id=int(request_id))
        if not request:
            raise NotFound(f"Makeup request {request_id} not found")
        return request

    def next_pending(self) -> Optional[MakeupRequest]:
        """Oldest pending request, the one an approver is shown first."""

        pending = self._requests.list_requests(status=RequestStatus.PENDING, limit=1)
        return pending[0] if pending else None

    def list_pending(self, *, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[MakeupRequest]:
        return self._requests.list_requests(status=RequestStatus.PENDING, limit=limit)

    def list_for_employee(self, employee_id: str, *, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[MakeupRequest]:
        return self._requests.list_requests(employee_id=employee_id, limit=limit)

    def count_approved(self, employee_id: str, year_month: str) -> int:
        start, end = month_bounds(year_month)
        return self._requests.count_approved_between(employee_id=employee_id, start=start, end=end)
