class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class DataFetchError(DomainError):
    """Raised when the backing store fails to answer a query or write.

    Carries the underlying driver message; the core never retries.
    """


class ConflictError(DomainError):
    """Raised when a write would duplicate data that already exists."""
