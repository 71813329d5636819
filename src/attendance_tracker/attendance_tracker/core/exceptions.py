class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFound(DomainError):
    """Raised when a referenced employee does not exist."""


class AccessDenied(AuthorizationError):
    """Raised when the caller's role does not match the operation."""


class ForbiddenDay(ValidationError):
    """Check-in attempted on the non-working day."""


class AlreadyCheckedIn(ValidationError):
    pass


class AlreadyCheckedOut(ValidationError):
    pass


class NotCheckedIn(ValidationError):
    pass


class InvalidInterval(ValidationError):
    """Check-out timestamp lies before check-in."""
