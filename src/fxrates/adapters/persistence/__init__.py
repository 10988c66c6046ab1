# src/fxrates/adapters/persistence/__init__.py
"""
Persistence Adapters - Data Storage

This package contains adapters for persisting rate records:
- File-based storage (JSON)
"""

from fxrates.adapters.persistence.file_store import RateFileStore

__all__ = [
    "RateFileStore",
]
