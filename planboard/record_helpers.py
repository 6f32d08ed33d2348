"""Task records kept in memory and mirrored to a durable store."""

from __future__ import annotations

import logging
import os
import threading
from datetime import date
from typing import Optional

from .persistence import SqliteTaskStore, TaskStore
from .records import TaskRecord, TaskRecordings

log = logging.getLogger(__name__)


def _record_from_path(path: Optional[str]) -> Optional[TaskRecord]:
    if not path:
        return None
    return TaskRecord(path)


class TaskRecordsHelper:
    """Looks records up in memory first, then in the store, and keeps both in step."""

    def __init__(self, store: Optional[TaskStore]) -> None:
        self.store = store
        self.recordings = TaskRecordings()
        self.errors: list[str] = []
        self.initialized: Optional[bool] = None
        self._lock = threading.Lock()

    def _error(self, message: str) -> None:
        log.warning("%s", message)
        self.errors.append(message)

    def init(self) -> bool:
        """Prepare the store and load every record it holds."""
        if self.store is None:
            self._error("No DB helper provided")
            self.initialized = False
            return False
        if not self.store.init():
            self._error("DB init failed")
            self.initialized = False
            return False
        ok = self.load_all_from_store()
        self.initialized = ok
        return ok

    def deinit(self) -> bool:
        """Release the store."""
        if self.store is None:
            return False
        return self.store.deinit()

    def _register(self, key, record: Optional[TaskRecord], add, what: str) -> bool:
        if self.store is None or record is None:
            return False
        if not add(key, record.task_file_path):
            self._error(f"{what} failed: {key}")
            return False
        with self._lock:
            self.recordings.register(key, record)
        return True

    def _get(self, key, lookup) -> Optional[TaskRecord]:
        if self.store is None:
            return None
        with self._lock:
            found = self.recordings.get(key)
        if found is not None:
            return found
        record = _record_from_path(lookup(key))
        if record is not None:
            with self._lock:
                self.recordings.register(key, record)
        return record

    def _remove(self, key, remove, what: str) -> bool:
        if self.store is None:
            return False
        if not remove(key):
            self._error(f"{what} failed: {key}")
        with self._lock:
            self.recordings.remove(key)
        return True

    # fields

    def register_field(self, field: str, record: Optional[TaskRecord]) -> bool:
        """Store a record under a field name."""
        return self._register(field, record, self.store.add_field if self.store else None, "addField")

    def get_field(self, field: str) -> Optional[TaskRecord]:
        """The record for a field, or None."""
        return self._get(field, self.store.get_field_path if self.store else None)

    def remove_field(self, field: str) -> bool:
        """Forget a field."""
        return self._remove(field, self.store.remove_field if self.store else None, "removeField")

    # months

    def register_month(self, month: int, record: Optional[TaskRecord]) -> bool:
        """Store a record under a month number."""
        return self._register(month, record, self.store.add_month if self.store else None, "addMonth")

    def get_month(self, month: int) -> Optional[TaskRecord]:
        """The record for a month number, or None."""
        return self._get(month, self.store.get_month_path if self.store else None)

    def remove_month(self, month: int) -> bool:
        """Forget a month."""
        return self._remove(month, self.store.remove_month if self.store else None, "removeMonth")

    # dates

    def register_date(self, day: date, record: Optional[TaskRecord]) -> bool:
        """Store a record under a date."""
        return self._register(day, record, self.store.add_date if self.store else None, "addDate")

    def get_date(self, day: date) -> Optional[TaskRecord]:
        """The record for a date, or None."""
        return self._get(day, self.store.get_date_path if self.store else None)

    def remove_date(self, day: date) -> bool:
        """Forget a date."""
        return self._remove(day, self.store.remove_date if self.store else None, "removeDate")

    # listings

    def all_fields(self) -> list[str]:
        """Every stored field name, sorted."""
        return self.store.all_fields() if self.store else []

    def all_months(self) -> list[int]:
        """Every stored month number, sorted."""
        return self.store.all_months() if self.store else []

    def all_dates(self) -> list[date]:
        """Every stored date, sorted."""
        return self.store.all_dates() if self.store else []

    def load_all_from_store(self) -> bool:
        """Copy every record the store holds into memory."""
        if self.store is None:
            return False
        for table in (
            self.store.get_all_fields(),
            self.store.get_all_months(),
            self.store.get_all_dates(),
        ):
            for key, path in table.items():
                record = _record_from_path(path)
                with self._lock:
                    self.recordings.register(key, record)
        return True


def sync_init(database_path: str | os.PathLike) -> Optional[TaskRecordsHelper]:
    """Open the SQLite store at the path and load it; None when that fails."""
    helper = TaskRecordsHelper(SqliteTaskStore(database_path))
    if not helper.init():
        return None
    return helper