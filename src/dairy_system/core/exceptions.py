class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a requested row does not exist."""

    status_code = 404


class DuplicateError(DomainError):
    """Raised when a unique value (e.g. farmer code) is already taken."""

    status_code = 409


class AuthenticationError(DomainError):
    """Raised when login credentials or tokens are invalid."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403
