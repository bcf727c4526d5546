"""Makeup dialog state.

The dialog is a small state machine; each state is its own type and the
session store only ever holds ``to_dict()`` of the current one::

    AwaitingShift --shift--> AwaitingAction --action--> AwaitingReason --reason--> (submitted)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ..common.validators import require_enum
from ..core.enums import ShiftSlot, StampAction
from ..core.exceptions import InvalidDialogStep, ValidationError

FLOW = "makeup"


@dataclass(frozen=True)
class AwaitingShift:
    step = "awaiting_shift"

    def to_dict(self) -> dict:
        return {"flow": FLOW, "step": self.step}


@dataclass(frozen=True)
class AwaitingAction:
    shift: ShiftSlot
    step = "awaiting_action"

    def to_dict(self) -> dict:
        return {"flow": FLOW, "step": self.step, "shift": self.shift.value}


@dataclass(frozen=True)
class AwaitingReason:
    shift: ShiftSlot
    action: StampAction
    step = "awaiting_reason"

    def to_dict(self) -> dict:
        return {"flow": FLOW, "step": self.step, "shift": self.shift.value, "action": self.action.value}


DialogState = Union[AwaitingShift, AwaitingAction, AwaitingReason]


def from_dict(data: Optional[dict]) -> Optional[DialogState]:
    """Rebuild a state from its stored form; anything unrecognized raises InvalidDialogStep."""

    if not data:
        return None
    if data.get("flow") != FLOW:
        raise InvalidDialogStep(f"Unknown dialog flow: {data.get('flow')!r}")

    step = data.get("step")
    try:
        if step == AwaitingShift.step:
            return AwaitingShift()
        if step == AwaitingAction.step:
            return AwaitingAction(shift=require_enum(ShiftSlot, data.get("shift"), "Shift"))
        if step == AwaitingReason.step:
            return AwaitingReason(
                shift=require_enum(ShiftSlot, data.get("shift"), "Shift"),
                action=require_enum(StampAction, data.get("action"), "Action"),
            )
    except ValidationError as e:
        raise InvalidDialogStep(f"Corrupt dialog payload: {e}")
    raise InvalidDialogStep(f"Unknown dialog step: {step!r}")


def choose_shift(state: Optional[DialogState], shift) -> AwaitingAction:
    if not isinstance(state, AwaitingShift):
        raise InvalidDialogStep("Not expecting a shift choice right now")
    return AwaitingAction(shift=require_enum(ShiftSlot, shift, "Shift"))


def choose_action(state: Optional[DialogState], action) -> AwaitingReason:
    if not isinstance(state, AwaitingAction):
        raise InvalidDialogStep("Not expecting a check-in/check-out choice right now")
    return AwaitingReason(shift=state.shift, action=require_enum(StampAction, action, "Action"))
