# src/fxrates/adapters/persistence/file_store.py
"""
File Store - Rate Record Persistence

This module keeps the ordered list of per-date rate records in a single JSON
file shaped ``{"dates": [record, ...]}``. The file is re-read on every query so
that writes made by other processes are observed, and rewritten as a whole on
every append using an atomic temp-file swap.

Reads never modify the file. A malformed file is only backed up (under a
timestamped name) when an append is about to replace it.

Files that USE this module:
- fxrates.application.rates_service (RatesService queries and appends through RateFileStore)
- fxrates.application.health (checks that the file is readable)
- fxrates.app (creates the store at settings.rates_file)

Files that this module USES:
- fxrates.domain.models (DateRateRecord)
- fxrates.domain.errors (StorageUnavailableError, InvalidRecordError)
"""
from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Union

from fxrates.domain.errors import InvalidRecordError, StorageUnavailableError
from fxrates.domain.models import DateRateRecord

logger = logging.getLogger(__name__)

DATES_KEY = "dates"
CORRUPT_SUFFIX = ".corrupt"


class MalformedStoreError(ValueError):
    """Raised when the backing file does not hold ``{"dates": [object, ...]}``."""
    pass


def _reject_constant(name: str) -> Any:
    # json.loads accepts NaN/Infinity by default; strict JSON does not
    raise MalformedStoreError(f"non-standard JSON constant {name}")


def _parse_document(data: Any) -> list[DateRateRecord]:
    """
    Turn a decoded JSON document into records.

    Args:
        data: Decoded file content

    Returns:
        Records in file order

    Raises:
        MalformedStoreError: If the document does not have the expected shape
    """
    if not isinstance(data, dict):
        raise MalformedStoreError("top-level JSON value is not an object")

    dates = data.get(DATES_KEY)
    if not isinstance(dates, list):
        raise MalformedStoreError(f"'{DATES_KEY}' is missing or not a list")

    for index, entry in enumerate(dates):
        if not isinstance(entry, dict):
            raise MalformedStoreError(f"entry {index} is not an object")

    return [DateRateRecord.from_json(entry) for entry in dates]


def _ensure_strict_json(record: DateRateRecord) -> None:
    """
    Check that a record can be written as standard JSON.

    Raises:
        InvalidRecordError: If the record holds NaN or an infinity
    """
    try:
        json.dumps(record.to_json(), allow_nan=False)
    except ValueError as e:
        raise InvalidRecordError("Record contains non-finite numbers") from e


class RateFileStore:
    """Ordered collection of DateRateRecord backed by a JSON file."""

    def __init__(self, path: Union[str, Path]):
        """
        Initialize the store. Nothing is read until load_all() is called.

        Args:
            path: Path to the JSON backing file (created on first append)
        """
        self.path = Path(path)
        # Serializes read-modify-write cycles of append() within this process
        self._write_lock = threading.Lock()

    def load_all(self) -> list[DateRateRecord]:
        """
        Read the full persisted collection.

        A missing file yields the default empty collection. A malformed file
        is logged and also treated as empty; the file itself is left alone.

        Returns:
            All records in file order

        Raises:
            StorageUnavailableError: If the file exists but cannot be read
        """
        try:
            return self._read()
        except MalformedStoreError as e:
            logger.warning("Rates file %s is malformed, treating as empty: %s", self.path, e)
            return []

    def find_by_date(self, date: str) -> Optional[DateRateRecord]:
        """
        Reload the store and return the first record whose date matches.

        Args:
            date: ISO calendar date, compared as an exact string

        Returns:
            Matching record, or None if no record has that date
        """
        for record in self.load_all():
            if record.date == date:
                return record
        return None

    def append(self, record: DateRateRecord) -> DateRateRecord:
        """
        Append a record and persist the whole collection atomically.

        No shape validation or duplicate-date check is performed. If the
        current file is malformed it is copied aside before being replaced
        by a collection holding only the new record.

        Args:
            record: Record to append

        Returns:
            The record that was stored

        Raises:
            InvalidRecordError: If the record cannot be written as standard JSON
            StorageUnavailableError: If the file cannot be read or written
        """
        _ensure_strict_json(record)

        with self._write_lock:
            try:
                records = self._read()
            except MalformedStoreError as e:
                self._back_up_corrupt(e)
                records = []
            records.append(record)
            self._save(records)
        logger.info("Appended rates for date %s (%d records)", record.date, len(records))
        return record

    def _read(self) -> list[DateRateRecord]:
        if not self.path.exists():
            logger.debug("Rates file %s not found, using empty collection", self.path)
            return []

        try:
            with self.path.open("r", encoding="utf-8") as f:
                raw = f.read()
        except OSError as e:
            raise StorageUnavailableError(f"Failed to read rates file: {e}") from e

        try:
            data = json.loads(raw, parse_constant=_reject_constant)
        except json.JSONDecodeError as e:
            raise MalformedStoreError(str(e)) from e
        return _parse_document(data)

    def _save(self, records: list[DateRateRecord]) -> None:
        """
        Write all records using temp file + atomic rename.

        Args:
            records: Full collection to persist
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        document = {DATES_KEY: [r.to_json() for r in records]}

        temp_fd, temp_path = tempfile.mkstemp(
            suffix=".json.tmp",
            dir=str(self.path.parent),
            text=True
        )

        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(document, f, ensure_ascii=False, indent=2, allow_nan=False)
                f.flush()
                os.fsync(f.fileno())  # Ensure data is written to disk

            # Atomic rename (replaces target file atomically on Unix/Windows)
            os.replace(temp_path, str(self.path))
        except (OSError, TypeError, ValueError) as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise StorageUnavailableError(f"Failed to save rates file: {e}") from e

    def _backup_path(self) -> Path:
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        base = f"{self.path.name}{CORRUPT_SUFFIX}-{stamp}"
        candidate = self.path.with_name(base)
        counter = 1
        while candidate.exists():
            candidate = self.path.with_name(f"{base}-{counter}")
            counter += 1
        return candidate

    def _back_up_corrupt(self, error: Exception) -> None:
        """Copy a malformed backing file aside before append replaces it."""
        backup_path = self._backup_path()
        try:
            shutil.copy2(self.path, backup_path)
        except OSError as backup_error:
            logger.error("Failed to back up corrupt rates file: %s", backup_error)
            raise StorageUnavailableError(
                f"Rates file is corrupt and could not be backed up: {error}"
            ) from backup_error
        logger.warning(
            "Rates file %s is malformed, backed up to %s before rewrite: %s",
            self.path, backup_path, error,
        )
