from __future__ import annotations

import logging
from typing import Optional

from ..core.exceptions import AlreadyStamped, InvalidDialogStep
from ..employees.model import Identity
from ..requests.model import MakeupRequest
from ..requests.service import MakeupWorkflow
from . import state as dialog
from .repository import SessionRepository

logger = logging.getLogger(__name__)


class MakeupDialogService:
    """Drives the shift -> action -> reason dialog that ends in a makeup submission."""

    def __init__(self, sessions: SessionRepository, workflow: MakeupWorkflow):
        self._sessions = sessions
        self._workflow = workflow

    def current(self, identity: Identity) -> Optional[dialog.DialogState]:
        try:
            return dialog.from_dict(self._sessions.get(identity.user_id))
        except InvalidDialogStep as e:
            logger.warning("Discarding dialog session of %s: %s", identity.user_id, e)
            self._sessions.delete(identity.user_id)
            return None

    def start(self, identity: Identity) -> dialog.AwaitingShift:
        state = dialog.AwaitingShift()
        self._sessions.set(identity.user_id, state.to_dict())
        return state

    def choose_shift(self, identity: Identity, shift) -> dialog.AwaitingAction:
        state = dialog.choose_shift(self.current(identity), shift)
        self._sessions.set(identity.user_id, state.to_dict())
        return state

    def choose_action(self, identity: Identity, action) -> dialog.AwaitingReason:
        state = dialog.choose_action(self.current(identity), action)
        self._sessions.set(identity.user_id, state.to_dict())
        return state

    def submit_reason(self, identity: Identity, reason: str) -> MakeupRequest:
        state = self.current(identity)
        if not isinstance(state, dialog.AwaitingReason):
            raise InvalidDialogStep("Not expecting a reason right now")

        try:
            request = self._workflow.submit(identity, shift=state.shift, action=state.action, reason=reason)
        except AlreadyStamped:
            # Nothing left to request for this slot.
            self._sessions.delete(identity.user_id)
            raise
        self._sessions.delete(identity.user_id)
        return request

    def cancel(self, identity: Identity) -> None:
        self._sessions.delete(identity.user_id)
