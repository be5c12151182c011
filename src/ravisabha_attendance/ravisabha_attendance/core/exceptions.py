from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations.

    Every subclass carries a stable user-facing message and the HTTP status the
    controllers answer with.
    """

    status_code = 400
    default_message = "Request could not be processed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    default_message = "Invalid input"


class MissingScopeError(ValidationError):
    """Raised when a query names neither a session nor a date scope."""

    default_message = "Date or Date Range parameters are required"


class InvalidIdentifierError(ValidationError):
    """Raised when an identifier is not in the store's id format."""

    default_message = "Invalid identifier"


class NotFoundError(DomainError):
    status_code = 404
    default_message = "Record not found"


class ConflictError(DomainError):
    status_code = 409
    default_message = "Conflicting record"


class DuplicateKeyError(ConflictError):
    """Raised when the store rejects an insert on a unique key."""

    default_message = "Attendance already marked"


class MemberInUseError(ConflictError):
    """Raised when a member still has attendance rows referencing them."""

    default_message = "Member has attendance records"


class DataIntegrityError(DomainError):
    """Raised (strict mode only) when a stored value is outside its domain."""

    status_code = 500
    default_message = "Stored data is inconsistent"


class StoreUnavailableError(DomainError):
    status_code = 503
    default_message = "Attendance store is unavailable, please try again"
