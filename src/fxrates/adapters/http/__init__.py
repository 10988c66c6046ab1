# src/fxrates/adapters/http/__init__.py
"""
HTTP Adapter - JSON API

This package exposes the rates service over HTTP:
- FastAPI application builder and middlewares
- Route handlers
- Response schemas
"""

from fxrates.adapters.http.handlers import build_routers, get_rates_service
from fxrates.adapters.http.server import build_application

__all__ = [
    "build_application",
    "build_routers",
    "get_rates_service",
]
