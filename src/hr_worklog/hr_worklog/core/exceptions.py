class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidSequenceError(ValidationError):
    """Raised when a START/STOP does not alternate with the user's last event."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class UnknownUserError(NotFoundError):
    """Raised when a user id does not reference an active user."""


class StoreUnavailableError(Exception):
    """Raised when the underlying database fails during a read or write."""
