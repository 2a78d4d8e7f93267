class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidDateRangeError(ValidationError):
    """Raised when a date range ends before it starts."""


class DataSourceError(DomainError):
    """Raised when the attendance/directory store cannot be read."""
