class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class StateConflictError(DomainError):
    """Raised when an action conflicts with the current state of an entity."""


class PreconditionError(DomainError):
    """Raised when a cross-component precondition blocks an action."""


class PersistenceError(Exception):
    """Raised by the remote store client; callers log it and keep local state."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class EntityNotFound(ValidationError):
    pass


# Time ledger
class DuplicateCheckIn(StateConflictError):
    pass


class NotCheckedIn(StateConflictError):
    pass


class AlreadyOnBreak(StateConflictError):
    pass


class NoActiveBreak(StateConflictError):
    pass


class AlreadyCheckedOut(StateConflictError):
    pass


class TasksRequired(PreconditionError):
    pass


# Task log
class InvalidTask(ValidationError):
    pass


class CommentRequired(ValidationError):
    pass


class TaskLocked(StateConflictError):
    pass


class TaskAlreadyReviewed(StateConflictError):
    pass


# Leave ledger
class InvalidRange(ValidationError):
    pass


class MissingReason(ValidationError):
    pass


class NotPending(StateConflictError):
    pass


class InsufficientCompLeave(StateConflictError):
    pass


# Payroll
class NothingToProcess(StateConflictError):
    pass
