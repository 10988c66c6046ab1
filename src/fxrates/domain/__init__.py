# src/fxrates/domain/__init__.py
"""
Domain Layer - Pure Business Objects

This package contains domain models and business rules.
No dependencies on infrastructure or external systems.
"""

from fxrates.domain.models import (
    BASE_CURRENCY,
    Conversion,
    DateRateRecord,
    UsdConversion,
)
from fxrates.domain.errors import (
    CurrencyNotFoundError,
    DateNotFoundError,
    DomainError,
    InvalidRecordError,
    RateNotFoundError,
    StorageUnavailableError,
)

__all__ = [
    "BASE_CURRENCY",
    "DateRateRecord",
    "UsdConversion",
    "Conversion",
    "DomainError",
    "RateNotFoundError",
    "DateNotFoundError",
    "CurrencyNotFoundError",
    "StorageUnavailableError",
    "InvalidRecordError",
]
