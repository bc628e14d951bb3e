class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class OverlappingMembershipError(ValidationError):
    """Raised when membership periods for the same user and team overlap."""


class ConfigurationError(ValidationError):
    """Raised when pay settings contradict each other."""


class NotFoundError(DomainError):
    """Raised when a requested team, organization or member does not exist."""
