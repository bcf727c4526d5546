from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role resolved for a chat identity."""

    ADMIN = "admin"
    STAFF = "staff"


class ShiftSlot(str, Enum):
    """The two shift slots tracked per attendance day."""

    MORNING = "morning"
    NIGHT = "night"


class StampAction(str, Enum):
    CHECK_IN = "checkIn"
    CHECK_OUT = "checkOut"


class StampSource(str, Enum):
    """Who wrote a stamp: the employee, an administrator, or an approved makeup."""

    NORMAL = "normal"
    ADMIN = "admin"
    MAKEUP = "makeup"


class RequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Decision(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"


class DayType(str, Enum):
    """Calendar classification of a date; closed days carry no attendance obligation."""

    OPEN = "open"
    CLOSED = "closed"
    HALF_DAY = "half_day"
