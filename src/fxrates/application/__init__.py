# src/fxrates/application/__init__.py
"""
Application Layer - Use Cases and Services

This package contains application services that orchestrate domain logic.
Storage is reached only through the store handed to each service.
"""

from fxrates.application.rates_service import RatesService, RateStore, format_amount
from fxrates.application.health import HealthChecker, HealthStatus

__all__ = [
    "RatesService",
    "RateStore",
    "format_amount",
    "HealthChecker",
    "HealthStatus",
]
