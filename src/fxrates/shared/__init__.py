# src/fxrates/shared/__init__.py
"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation and lenient parsing
- Logging configuration
"""

from fxrates.shared.validators import (
    normalize_currency_code,
    parse_amount,
    validate_host,
    validate_log_level,
)
from fxrates.shared.logging_conf import request_id_var, setup_logging

__all__ = [
    "validate_host",
    "validate_log_level",
    "normalize_currency_code",
    "parse_amount",
    "request_id_var",
    "setup_logging",
]
