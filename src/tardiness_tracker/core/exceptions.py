class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is missing or contradictory.

    Always raised before any store call, so nothing has been written.
    """


class StoreError(DomainError):
    """Raised when the record store reports a failure."""
