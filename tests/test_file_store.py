# tests/test_file_store.py
"""
File Store Tests - Unit Tests for Rate Record Persistence

This module contains unit tests for RateFileStore: loading the backing file,
date lookups, atomic appends, backups of corrupt files and storage errors.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- fxrates.adapters.persistence.file_store (RateFileStore)
- fxrates.domain.models (DateRateRecord for test data)
- fxrates.domain.errors (StorageUnavailableError, InvalidRecordError)
- unittest.mock (patch for simulating I/O failures and pinning the clock)
- pytest (testing framework)
"""
import json  # Inspect the persisted file
import threading  # Concurrent appends
from datetime import datetime, timezone  # Fixed clock for backup names
from pathlib import Path  # Patch target for read failures
from unittest.mock import patch  # Simulate filesystem errors and pin the clock

import pytest  # Testing framework for writing and running tests

from fxrates.adapters.persistence.file_store import RateFileStore  # Store under test
from fxrates.domain.errors import InvalidRecordError, StorageUnavailableError  # Store errors
from fxrates.domain.models import DateRateRecord  # Domain model for test data


def _read(path):
    return json.loads(path.read_text(encoding="utf-8"))


def _backups(path):
    return sorted(path.parent.glob(path.name + ".corrupt*"))


class TestLoadAll:
    def test_loads_records_in_file_order(self, store, sample_dates):
        records = store.load_all()

        assert [r.date for r in records] == ["2026-02-23", "2026-02-24"]
        assert [r.to_json() for r in records] == sample_dates

    def test_missing_file_is_empty_collection(self, tmp_path):
        store = RateFileStore(tmp_path / "absent.json")

        assert store.load_all() == []
        assert not (tmp_path / "absent.json").exists()

    def test_invalid_json_is_treated_as_empty_and_left_in_place(self, rates_file):
        rates_file.write_text("{not json", encoding="utf-8")
        store = RateFileStore(rates_file)

        assert store.load_all() == []
        assert store.find_by_date("2026-02-24") is None
        assert rates_file.read_text(encoding="utf-8") == "{not json"
        assert _backups(rates_file) == []

    def test_non_standard_constants_are_malformed(self, rates_file):
        rates_file.write_text('{"dates": [{"date": "2026-02-24", "rates": {"INR": NaN}}]}', encoding="utf-8")

        assert RateFileStore(rates_file).load_all() == []

    @pytest.mark.parametrize("content", [
        [],
        {"dates": "2026-02-24"},
        {"other": []},
        {"dates": [1, 2]},
    ])
    def test_wrong_shape_is_treated_as_empty(self, rates_file, content):
        rates_file.write_text(json.dumps(content), encoding="utf-8")

        assert RateFileStore(rates_file).load_all() == []
        assert _read(rates_file) == content

    def test_unreadable_file_raises_storage_unavailable(self, store):
        with patch.object(Path, "open", side_effect=PermissionError("denied")):
            with pytest.raises(StorageUnavailableError, match="Failed to read rates file"):
                store.load_all()

    def test_observes_external_writes(self, store, rates_file, sample_dates):
        assert len(store.load_all()) == 2

        external = sample_dates + [{"date": "2026-02-25", "rates": {"INR": 83.3}}]
        rates_file.write_text(json.dumps({"dates": external}), encoding="utf-8")

        assert store.find_by_date("2026-02-25").rates == {"INR": 83.3}
        assert len(store.load_all()) == 3


class TestFindByDate:
    def test_present_date(self, store):
        record = store.find_by_date("2026-02-24")

        assert record.rates["INR"] == 83.12

    def test_absent_date(self, store):
        assert store.find_by_date("1999-01-01") is None

    def test_first_match_wins_for_duplicate_dates(self, store):
        store.append(DateRateRecord.from_json({"date": "2026-02-24", "rates": {"INR": 1.0}}))

        assert store.find_by_date("2026-02-24").rates["INR"] == 83.12


class TestAppend:
    def test_append_persists_whole_collection(self, store, rates_file, sample_dates):
        new = {"date": "2099-01-01", "rates": {"INR": 90}}

        returned = store.append(DateRateRecord.from_json(new))

        assert returned.to_json() == new
        assert _read(rates_file) == {"dates": sample_dates + [new]}

    def test_append_creates_missing_file(self, tmp_path):
        path = tmp_path / "nested" / "rates.json"
        store = RateFileStore(path)

        store.append(DateRateRecord.from_json({"date": "2026-01-01", "rates": {}}))

        assert _read(path) == {"dates": [{"date": "2026-01-01", "rates": {}}]}

    def test_append_keeps_unknown_keys_untouched(self, store, rates_file):
        new = {"source": "manual", "date": "2099-01-02", "rates": {"EUR": "0.9"}, "note": None}

        store.append(DateRateRecord.from_json(new))

        assert _read(rates_file)["dates"][-1] == new

    def test_write_failure_raises_and_leaves_no_temp_file(self, store, rates_file, sample_dates):
        with patch("fxrates.adapters.persistence.file_store.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(StorageUnavailableError, match="Failed to save rates file"):
                store.append(DateRateRecord.from_json({"date": "2099-01-01", "rates": {}}))

        assert _read(rates_file) == {"dates": sample_dates}
        assert list(rates_file.parent.glob("*.tmp")) == []

    def test_concurrent_appends_are_not_lost(self, store, rates_file):
        def worker(n):
            store.append(DateRateRecord.from_json({"date": f"2030-01-{n:02d}", "rates": {"INR": n}}))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(1, 21)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        dates = [d["date"] for d in _read(rates_file)["dates"]]
        assert len(dates) == 22
        assert sorted(dates[2:]) == [f"2030-01-{n:02d}" for n in range(1, 21)]

    def test_corrupt_file_is_backed_up_then_replaced(self, rates_file):
        rates_file.write_text("{not json", encoding="utf-8")
        store = RateFileStore(rates_file)
        new = {"date": "2099-01-01", "rates": {"INR": 90}}

        store.append(DateRateRecord.from_json(new))

        backups = _backups(rates_file)
        assert len(backups) == 1
        assert backups[0].read_text(encoding="utf-8") == "{not json"
        assert _read(rates_file) == {"dates": [new]}

    def test_backups_never_overwrite_each_other(self, rates_file):
        store = RateFileStore(rates_file)
        fixed = datetime(2026, 10, 16, 12, 0, 0, tzinfo=timezone.utc)

        with patch("fxrates.adapters.persistence.file_store.datetime") as mock_datetime:
            mock_datetime.now.return_value = fixed
            for content in ("first broken", "second broken"):
                rates_file.write_text(content, encoding="utf-8")
                store.append(DateRateRecord.from_json({"date": "2099-01-01", "rates": {}}))

        backups = _backups(rates_file)
        assert len(backups) == 2
        assert sorted(b.read_text(encoding="utf-8") for b in backups) == ["first broken", "second broken"]

    def test_failed_backup_leaves_corrupt_file_in_place(self, rates_file):
        rates_file.write_text("{not json", encoding="utf-8")
        store = RateFileStore(rates_file)

        with patch("fxrates.adapters.persistence.file_store.shutil.copy2", side_effect=OSError("denied")):
            with pytest.raises(StorageUnavailableError, match="could not be backed up"):
                store.append(DateRateRecord.from_json({"date": "2099-01-01", "rates": {}}))

        assert rates_file.read_text(encoding="utf-8") == "{not json"

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_numbers_are_rejected_before_writing(self, store, rates_file, sample_dates, value):
        record = DateRateRecord.from_json({"date": "2099-01-01", "rates": {"INR": value}})

        with pytest.raises(InvalidRecordError, match="non-finite"):
            store.append(record)

        assert _read(rates_file) == {"dates": sample_dates}
        assert list(rates_file.parent.glob("*.tmp")) == []
