# src/fxrates/domain/models.py
"""
Domain Models - Pure Business Objects

This module contains domain models representing core business concepts:
- Per-date rate records (one day's rates against USD)
- Conversion results

Files that USE this module:
- fxrates.adapters.persistence.file_store (stores and loads DateRateRecord)
- fxrates.application.rates_service (looks up records, builds conversions)
- fxrates.adapters.http.handlers (serializes records and conversions)
- tests.* (tests use domain models for test data)

Files that this module USES:
- None (pure domain layer, no external dependencies)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from dataclasses import dataclass, field  # Decorators for creating data classes
from typing import Any, Mapping  # Type hints for raw JSON documents

BASE_CURRENCY = "USD"


@dataclass(frozen=True)
class DateRateRecord:
    """
    One day's snapshot of currency rates, expressed as currency per 1 USD.

    The record keeps the JSON document exactly as it was received so that
    appended records are echoed and persisted without any change, including
    keys this service does not know about.

    Attributes:
        document: Raw JSON object, normally ``{"date": ..., "rates": {...}}``
    """
    document: dict[str, Any] = field(default_factory=dict)

    @property
    def date(self) -> Any:
        return self.document.get("date")

    @property
    def rates(self) -> Mapping[str, Any]:
        """Rates mapping, or an empty mapping when the record carries none."""
        rates = self.document.get("rates")
        return rates if isinstance(rates, Mapping) else {}

    def to_json(self) -> dict[str, Any]:
        """Return the record as a JSON-serializable dictionary."""
        return self.document

    @staticmethod
    def from_json(data: dict[str, Any]) -> "DateRateRecord":
        return DateRateRecord(document=data)


@dataclass(frozen=True)
class UsdConversion:
    """
    Result of converting a USD amount into another currency.

    Attributes:
        date: Date whose rates were used
        to_currency: Target currency code (uppercase)
        amount: Parsed USD amount (may be NaN)
        rate: Rate exactly as stored for the target currency
        converted_amount: ``amount * rate`` formatted to two decimals
    """
    date: str
    to_currency: str
    amount: float
    rate: Any
    converted_amount: str
    from_currency: str = BASE_CURRENCY


@dataclass(frozen=True)
class Conversion:
    """
    Result of converting between two currencies through USD.

    Attributes:
        date: Date whose rates were used
        from_currency: Source currency code (uppercase)
        to_currency: Target currency code (uppercase)
        amount: Parsed source amount (may be NaN)
        converted_amount: Converted value formatted to two decimals
    """
    date: str
    from_currency: str
    to_currency: str
    amount: float
    converted_amount: str
