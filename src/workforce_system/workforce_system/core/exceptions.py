class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login fails."""


class InvalidCredentials(AuthenticationError):
    """Unknown identifier or wrong secret."""


class RoleMismatch(AuthenticationError):
    """The claimed role does not match the principal's stored role."""


class AuthorizationError(DomainError):
    """Raised when a caller may not perform an action."""


class SessionInvalid(AuthorizationError):
    """Missing, unknown or revoked session token."""


class SessionExpired(AuthorizationError):
    pass


class CapabilityDenied(AuthorizationError):
    pass


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class UnknownEmployee(NotFoundError):
    pass


class UnknownRole(NotFoundError):
    pass


class PayrollRecordNotFound(NotFoundError):
    pass


class ConflictError(DomainError):
    """Raised when a write would break a uniqueness or reference rule."""


class DuplicatePeriod(ConflictError):
    """A payroll record already exists for (employee, month, year)."""


class DuplicateIdentifier(ConflictError):
    """emp_id, email or role name collision."""


class ReferentialConflict(ConflictError):
    """Delete of a row that other rows still reference."""
