# src/fxrates/adapters/__init__.py
"""
Adapters Layer - External Interfaces

This package contains all adapters for external systems:
- HTTP (FastAPI routes and app factory)
- Persistence (storage)
"""

__all__ = []
