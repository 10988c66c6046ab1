# tests/conftest.py
"""
Shared Test Fixtures

Provides a temporary rates file seeded with sample records, a RateFileStore
over it, and a FastAPI TestClient wired to that store.

Files that USE this module:
- pytest (fixtures are injected into tests by name)

Files that this module USES:
- fxrates.adapters.persistence.file_store (RateFileStore)
- fxrates.adapters.http.server (build_application)
- fastapi.testclient (TestClient)
"""
import json  # Seed the backing file

import pytest  # Testing framework for writing and running tests
from fastapi.testclient import TestClient  # In-process HTTP client for the FastAPI app

from fxrates.adapters.persistence.file_store import RateFileStore  # Store under test
from fxrates.adapters.http.server import build_application  # App factory under test

SAMPLE_DATES = [
    {"date": "2026-02-23", "rates": {"INR": 83.05, "EUR": 0.92, "JPY": 150.1}},
    {"date": "2026-02-24", "rates": {"INR": 83.12, "EUR": 0.91, "XYZ": 0}},
]


@pytest.fixture
def sample_dates():
    return json.loads(json.dumps(SAMPLE_DATES))


@pytest.fixture
def rates_file(tmp_path, sample_dates):
    path = tmp_path / "data" / "currency_rates.json"
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps({"dates": sample_dates}), encoding="utf-8")
    return path


@pytest.fixture
def store(rates_file):
    return RateFileStore(rates_file)


@pytest.fixture
def client(store):
    return TestClient(build_application(store))
