class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class ConflictError(DomainError):
    """Base for violations caused by the current state of a record."""


class InvalidIntervalError(ValidationError):
    """Check-out at or before check-in."""


class InvalidDateRangeError(ValidationError):
    """Leave end date before start date."""


class DuplicateCheckInError(ConflictError):
    pass


class MissingCheckInError(ConflictError):
    pass


class AlreadyCheckedOutError(ConflictError):
    pass


class InvalidStateTransitionError(ConflictError):
    """Transition attempted out of a terminal (or otherwise disallowed) state."""


class DuplicatePeriodError(ConflictError):
    """Salary already generated for (employee, month, year)."""


class AlreadyPaidError(ConflictError):
    pass


class InsufficientLeaveBalanceError(ConflictError):
    """Approving the leave would drive the balance below zero."""


class DuplicateEmailError(ConflictError):
    pass


class DuplicateNameError(ConflictError):
    """A department or designation with this name already exists."""
