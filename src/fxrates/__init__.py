# src/fxrates/__init__.py
"""
FXRates - Historical Exchange Rate Service

A small HTTP service that serves per-date currency rates (relative to USD)
from a JSON file and converts amounts between currencies on a given date.
"""

__version__ = "1.0.0"
