# src/fxrates/domain/errors.py
"""
Domain Errors - Business Logic Exceptions

This module defines domain-specific exceptions raised by the rate store
and the rates service. The HTTP adapter maps them onto status codes.
"""


class DomainError(Exception):
    """Base exception for domain errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RateNotFoundError(DomainError):
    """Base for lookups that found nothing."""
    pass


class DateNotFoundError(RateNotFoundError):
    """Raised when no record exists for the requested date."""
    pass


class CurrencyNotFoundError(RateNotFoundError):
    """Raised when a currency has no usable rate on the requested date."""
    pass


class StorageUnavailableError(DomainError):
    """Raised when the backing file cannot be read or written."""
    pass


class InvalidRecordError(DomainError):
    """Raised when a record cannot be persisted as standard JSON."""
    pass
