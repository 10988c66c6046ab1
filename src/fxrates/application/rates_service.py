# src/fxrates/application/rates_service.py
"""
Rates Service - Business Logic for Exchange Rate Operations

This module contains the lookup and conversion logic of the service. Every
operation reloads the store first so that records written by other
processes are visible, then resolves rates for a date and converts amounts
through USD, the base currency of every record.

Files that USE this module:
- fxrates.adapters.http.handlers (one RatesService per request)
- tests.test_rates_service (unit tests)

Files that this module USES:
- fxrates.domain.models (DateRateRecord, UsdConversion, Conversion)
- fxrates.domain.errors (DateNotFoundError, CurrencyNotFoundError)
- fxrates.shared.validators (parse_amount, normalize_currency_code)
"""
from __future__ import annotations  # Enable postponed evaluation of annotations

import logging
import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any, Optional, Protocol

from fxrates.domain.errors import CurrencyNotFoundError, DateNotFoundError
from fxrates.domain.models import BASE_CURRENCY, Conversion, DateRateRecord, UsdConversion
from fxrates.shared.validators import normalize_currency_code, parse_amount

logger = logging.getLogger(__name__)

_CENTS = Decimal("0.01")
# Wide enough that quantizing any finite float never overflows the context
_FORMAT_CONTEXT = Context(prec=400)


class RateStore(Protocol):
    """Store access needed by the service (implemented by RateFileStore)."""
    def load_all(self) -> list[DateRateRecord]:
        ...

    def find_by_date(self, date: str) -> Optional[DateRateRecord]:
        ...

    def append(self, record: DateRateRecord) -> DateRateRecord:
        ...


def _is_present(value: Any) -> bool:
    """
    Tell whether a stored rate counts as present.

    Missing, null, false, zero, NaN and empty strings all count as absent,
    so a rate of exactly 0 is never usable.
    """
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, (int, float)):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value != ""
    return True


def _as_number(value: Any) -> Optional[float]:
    """
    Coerce a present stored rate to a float for arithmetic.

    Args:
        value: Rate exactly as stored (normally a float)

    Returns:
        Rate as float, or None if it is absent or not numeric
    """
    if not _is_present(value):
        return None
    if isinstance(value, (bool, int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return None
        return number if number != 0 and not math.isnan(number) else None
    return None


def format_amount(value: float) -> str:
    """
    Format a number with exactly two decimals, rounding half up.

    Rounding is applied to the exact binary value of the float, so
    ``format_amount(1.005) == "1.00"`` while ``format_amount(0.125) == "0.13"``.
    Non-finite values are spelled ``NaN``, ``Infinity`` and ``-Infinity``.

    Args:
        value: Amount to format

    Returns:
        Formatted amount string
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        value = 0.0  # drop the sign of -0.0
    quantized = Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP, context=_FORMAT_CONTEXT)
    return f"{quantized:f}"


class RatesService:
    """
    Lookups and conversions over a rate store.
    The store is passed in so handlers and tests control where data lives.
    """
    def __init__(self, store: RateStore):
        """
        Initialize rates service with a store.

        Args:
            store: RateStore instance (typically a RateFileStore)
        """
        self.store = store

    def list_rates(self) -> list[DateRateRecord]:
        """Return every stored record in append order."""
        return self.store.load_all()

    def get_by_date(self, date: str) -> DateRateRecord:
        """
        Get the record for a date.

        Raises:
            DateNotFoundError: If no record has that date
        """
        record = self.store.find_by_date(date)
        if record is None:
            logger.info("No rates stored for date %s", date)
            raise DateNotFoundError(f"Failed to fetch the currency conversion rates on {date}")
        return record

    def get_currency_rate(self, date: str, currency: str) -> tuple[str, Any]:
        """
        Get one currency's rate on a date.

        Args:
            date: ISO calendar date
            currency: Currency code in any case

        Returns:
            Tuple of (uppercase currency code, rate exactly as stored)

        Raises:
            DateNotFoundError: If no record has that date
            CurrencyNotFoundError: If the currency has no usable rate that day
        """
        record = self._record_for(date)
        code = normalize_currency_code(currency)
        rate = record.rates.get(code)
        if not _is_present(rate):
            raise CurrencyNotFoundError("Currency not found for this date")
        return code, rate

    def convert_from_usd(self, date: str, currency: str, amount: str) -> UsdConversion:
        """
        Convert a USD amount into ``currency`` using that date's rate.

        Args:
            date: ISO calendar date
            currency: Target currency code in any case
            amount: Raw amount (non-numeric input becomes NaN)

        Returns:
            UsdConversion with ``amount * rate`` formatted to two decimals

        Raises:
            DateNotFoundError: If no record has that date
            CurrencyNotFoundError: If the currency has no usable rate that day
        """
        record = self._record_for(date)
        code = normalize_currency_code(currency)
        raw_rate = record.rates.get(code)
        rate = _as_number(raw_rate)
        if rate is None:
            raise CurrencyNotFoundError("Currency not found")

        value = parse_amount(amount)
        return UsdConversion(
            date=date,
            to_currency=code,
            amount=value,
            rate=raw_rate,
            converted_amount=format_amount(value * rate),
        )

    def convert(self, date: str, from_currency: str, to_currency: str, amount: str) -> Conversion:
        """
        Convert between any two currencies through USD.

        USD always has rate 1.0; every other code is looked up in the
        date's record. ``converted = amount / from_rate * to_rate``.

        Args:
            date: ISO calendar date
            from_currency: Source currency code in any case
            to_currency: Target currency code in any case
            amount: Raw amount (non-numeric input becomes NaN)

        Returns:
            Conversion with the converted amount formatted to two decimals

        Raises:
            DateNotFoundError: If no record has that date
            CurrencyNotFoundError: If either side has no usable rate that day
        """
        record = self._record_for(date)
        from_code = normalize_currency_code(from_currency)
        to_code = normalize_currency_code(to_currency)

        from_rate = self._resolve_rate(record, from_code)
        to_rate = self._resolve_rate(record, to_code)
        if from_rate is None or to_rate is None:
            raise CurrencyNotFoundError("Invalid currency")

        value = parse_amount(amount)
        usd_value = value / from_rate
        return Conversion(
            date=date,
            from_currency=from_code,
            to_currency=to_code,
            amount=value,
            converted_amount=format_amount(usd_value * to_rate),
        )

    def add_rate(self, document: dict[str, Any]) -> DateRateRecord:
        """Append a record as received and return it."""
        return self.store.append(DateRateRecord.from_json(document))

    def _record_for(self, date: str) -> DateRateRecord:
        record = self.store.find_by_date(date)
        if record is None:
            raise DateNotFoundError("Date not found")
        return record

    @staticmethod
    def _resolve_rate(record: DateRateRecord, code: str) -> Optional[float]:
        if code == BASE_CURRENCY:
            return 1.0
        return _as_number(record.rates.get(code))
