class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced subject or record no longer exists."""


class InvalidTransitionError(DomainError):
    """Raised when the attendance workflow receives an answer its current step does not accept."""


class FlowBusyError(DomainError):
    """Raised when input arrives while the workflow's write is still outstanding."""


class StoreError(DomainError):
    """Raised when a call to the record/subject store fails."""


class ConflictWriteError(StoreError):
    """Raised when the attendance upsert could not be applied."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""
