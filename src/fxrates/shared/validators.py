# src/fxrates/shared/validators.py
"""
Input Validation Utilities - Configuration and Request Value Checks

This module provides small validation and parsing helpers. Settings use the
validators to reject bad configuration early; the rates service uses the
parsers to read path parameters the same lenient way for every route.

Files that USE this module:
- fxrates.config.settings (uses validation functions in Settings field validators)
- fxrates.application.rates_service (parse_amount, normalize_currency_code)

Files that this module USES:
- None (pure utility functions)
"""
import ipaddress
import math
import re

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def validate_host(host: str) -> bool:
    """
    Validate bind address (IPv4/IPv6 literal or hostname).

    Args:
        host: Address to validate

    Returns:
        True if valid, False otherwise
    """
    if not host:
        return False

    try:
        ipaddress.ip_address(host)
        return True
    except ValueError:
        pass

    # Hostname: dot-separated labels of letters, digits and hyphens
    pattern = r'^(?!-)[A-Za-z0-9-]{1,63}(?<!-)(\.(?!-)[A-Za-z0-9-]{1,63}(?<!-))*$'
    return bool(re.match(pattern, host))


def validate_log_level(level: str) -> bool:
    """
    Validate logging level name.

    Args:
        level: Level name, already uppercased

    Returns:
        True if valid, False otherwise
    """
    return level in LOG_LEVELS


def normalize_currency_code(code: str) -> str:
    """Uppercase a currency code for lookup (``inr`` -> ``INR``)."""
    return str(code).upper()


_DECIMAL_RE = re.compile(r'^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$', re.ASCII)
_RADIX_PREFIXES = {"0x": 16, "0o": 8, "0b": 2}


def parse_amount(value: str) -> float:
    """
    Parse a numeric path parameter without rejecting it.

    Follows JavaScript ``Number()`` string conversion: surrounding whitespace
    is ignored, an empty string is 0, ``0x``/``0o``/``0b`` literals and
    ``Infinity`` are accepted. Python-only spellings such as ``inf``, ``nan``
    or ``1_000`` are not numbers. Anything that is not a number becomes NaN,
    which then flows through the arithmetic instead of producing an error
    response.

    Args:
        value: Raw path parameter (e.g. ``"1000"``, ``"12.5"``, ``"abc"``)

    Returns:
        Parsed float, or NaN when the value is not numeric
    """
    text = str(value).strip()
    if not text:
        return 0.0

    if text in ("Infinity", "+Infinity"):
        return math.inf
    if text == "-Infinity":
        return -math.inf

    base = _RADIX_PREFIXES.get(text[:2].lower())
    if base is not None:
        digits = text[2:]
        # int() would also accept a sign or underscores here
        if not digits or not digits.isalnum() or not digits.isascii():
            return math.nan
        try:
            number = int(digits, base)
        except ValueError:
            return math.nan
        try:
            return float(number)
        except OverflowError:
            return math.inf

    if not _DECIMAL_RE.match(text):
        return math.nan
    return float(text)
