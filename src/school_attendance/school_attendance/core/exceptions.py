class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is missing, malformed or violates domain rules."""


class InvalidDateError(ValidationError):
    """Raised when a date string cannot be parsed."""


class NotFoundError(DomainError):
    """Raised when a class or student id does not resolve."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
