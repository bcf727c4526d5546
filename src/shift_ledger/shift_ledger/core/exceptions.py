class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when an identity lacks permission for an action."""


class AlreadyStamped(ValidationError):
    """The shift slot already holds a value for this action; nothing to do."""


class CheckInRequired(ValidationError):
    """A normal check-out was attempted on a slot with no check-in."""


class InvalidDialogStep(ValidationError):
    """Input does not fit the current step of a multi-step dialog."""


class NotFound(DomainError):
    """Unknown request id or missing record."""


class NotRegistered(NotFound):
    """The chat identity is not bound to an employee."""


class AlreadyDecided(DomainError):
    """The request left the pending state before this decision could apply."""


class SelfApproval(DomainError):
    """An approver tried to decide on their own request."""


class BadSchedule(DomainError):
    """A schedule entry exists but its times cannot be used."""


class MissingSchedule(DomainError):
    """No schedule entry exists for the requested date and shift."""


class StorageConflict(DomainError):
    """A storage transaction kept conflicting; the caller should try again."""
