"""Task records and the in-memory index of them by field, month and date."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

Key = Union[str, int, date]


@dataclass
class TaskRecord:
    """A plan, known by the path of its markdown file."""

    task_file_path: str


class TaskRecordings:
    """Records kept apart by key kind: field name, month number or date."""

    def __init__(self) -> None:
        self._fields: dict[str, Optional[TaskRecord]] = {}
        self._months: dict[int, Optional[TaskRecord]] = {}
        self._dates: dict[date, Optional[TaskRecord]] = {}

    def _table(self, key: Key) -> tuple[dict, Key]:
        if isinstance(key, str):
            return self._fields, key
        if isinstance(key, datetime):
            return self._dates, key.date()
        if isinstance(key, date):
            return self._dates, key
        if isinstance(key, int) and not isinstance(key, bool):
            return self._months, key
        raise TypeError(f"unsupported record key: {key!r}")

    def register(self, key: Key, record: Optional[TaskRecord]) -> None:
        """Store a record under the key, replacing any earlier one."""
        table, key = self._table(key)
        table[key] = record

    def get(self, key: Key) -> Optional[TaskRecord]:
        """The record for the key, or None."""
        table, key = self._table(key)
        return table.get(key)

    def remove(self, key: Key) -> bool:
        """Drop the key; True if it was present."""
        table, key = self._table(key)
        return table.pop(key, _MISSING) is not _MISSING


_MISSING = object()