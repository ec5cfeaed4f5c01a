class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced document does not exist."""


class AuthorizationError(DomainError):
    """Raised when the current role may not perform an action."""
