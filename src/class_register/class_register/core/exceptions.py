class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFound(DomainError):
    """Raised when a class or student id no longer exists."""


class ConstraintViolation(DomainError):
    """Raised when a write breaks a foreign key or uniqueness constraint."""


class IOFailure(DomainError):
    """Raised when the underlying storage is unavailable."""
