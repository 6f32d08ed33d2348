"""Durable storage of plan file paths by field, month and date."""

from __future__ import annotations

import logging
import os
import sqlite3
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Optional

log = logging.getLogger(__name__)

_SCHEMA = (
    "CREATE TABLE IF NOT EXISTS fields (field TEXT PRIMARY KEY, path TEXT NOT NULL);",
    "CREATE TABLE IF NOT EXISTS months (month INTEGER PRIMARY KEY, path TEXT NOT NULL);",
    "CREATE TABLE IF NOT EXISTS dates (date TEXT PRIMARY KEY, path TEXT NOT NULL);",
)


def _iso(day: date) -> str:
    if isinstance(day, datetime):
        day = day.date()
    return day.isoformat()


def _parse_iso(text: str) -> Optional[date]:
    try:
        return date.fromisoformat(text)
    except (TypeError, ValueError):
        return None


class TaskStore(ABC):
    """Where the paths of plan files are kept between sessions."""

    @abstractmethod
    def init(self) -> bool:
        """Prepare the store for use."""

    @abstractmethod
    def deinit(self) -> bool:
        """Release the store."""

    @abstractmethod
    def add_field(self, field: str, md_path: str) -> bool:
        """Store or replace the path for a field."""

    @abstractmethod
    def update_field(self, field: str, md_path: str) -> bool:
        """Change the path of an existing field."""

    @abstractmethod
    def remove_field(self, field: str) -> bool:
        """Forget a field."""

    @abstractmethod
    def get_field_path(self, field: str) -> Optional[str]:
        """The path stored for a field, or None."""

    @abstractmethod
    def get_all_fields(self) -> dict[str, str]:
        """Every field with its path."""

    @abstractmethod
    def all_fields(self) -> list[str]:
        """Every field name, sorted."""

    @abstractmethod
    def add_month(self, month: int, md_path: str) -> bool:
        """Store or replace the path for a month."""

    @abstractmethod
    def update_month(self, month: int, md_path: str) -> bool:
        """Change the path of an existing month."""

    @abstractmethod
    def remove_month(self, month: int) -> bool:
        """Forget a month."""

    @abstractmethod
    def get_month_path(self, month: int) -> Optional[str]:
        """The path stored for a month, or None."""

    @abstractmethod
    def get_all_months(self) -> dict[int, str]:
        """Every month with its path."""

    @abstractmethod
    def month_exists(self, month: int) -> bool:
        """Whether a month has a stored path."""

    @abstractmethod
    def clear_months(self) -> bool:
        """Forget every month."""

    @abstractmethod
    def all_months(self) -> list[int]:
        """Every month number, sorted."""

    @abstractmethod
    def add_date(self, day: date, md_path: str) -> bool:
        """Store or replace the path for a date."""

    @abstractmethod
    def update_date(self, day: date, md_path: str) -> bool:
        """Change the path of an existing date."""

    @abstractmethod
    def remove_date(self, day: date) -> bool:
        """Forget a date."""

    @abstractmethod
    def get_date_path(self, day: date) -> Optional[str]:
        """The path stored for a date, or None."""

    @abstractmethod
    def get_all_dates(self) -> dict[date, str]:
        """Every date with its path."""

    @abstractmethod
    def all_dates(self) -> list[date]:
        """Every date, sorted."""


class SqliteTaskStore(TaskStore):
    """A task store kept in an SQLite database file."""

    def __init__(self, db_path: str | os.PathLike) -> None:
        self.db_path = os.fspath(db_path)
        self._conn: Optional[sqlite3.Connection] = None

    def __enter__(self) -> "SqliteTaskStore":
        self.init()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._close()

    def __del__(self) -> None:
        try:
            self._close()
        except Exception:  # interpreter shutdown
            pass

    @property
    def is_open(self) -> bool:
        """Whether the database connection is open."""
        return self._conn is not None

    def _open(self) -> bool:
        if self._conn is not None:
            return True
        try:
            self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
        except sqlite3.Error as err:
            log.warning("Failed to open sqlite db: %s", err)
            self._conn = None
            return False
        return True

    def _close(self) -> bool:
        if self._conn is None:
            return False
        self._conn.close()
        self._conn = None
        return True

    def _write(self, what: str, sql: str, params: tuple = ()) -> Optional[int]:
        """Run a statement that changes data; the affected row count, or None."""
        if not self._open():
            return None
        try:
            with self._conn:
                cursor = self._conn.execute(sql, params)
                return cursor.rowcount
        except sqlite3.Error as err:
            log.warning("%s failed: %s", what, err)
            return None

    def _read(self, what: str, sql: str, params: tuple = ()) -> list[tuple]:
        """Run a query on an open connection; no rows when closed or failing."""
        if self._conn is None:
            return []
        try:
            return self._conn.execute(sql, params).fetchall()
        except sqlite3.Error as err:
            log.warning("%s failed: %s", what, err)
            return []

    def init(self) -> bool:
        """Open the database and create its tables when missing."""
        if not self._open():
            return False
        try:
            with self._conn:
                for statement in _SCHEMA:
                    self._conn.execute(statement)
        except sqlite3.Error as err:
            log.warning("creating tables failed: %s", err)
            return False
        return True

    def deinit(self) -> bool:
        """Close the database."""
        if not self._open():
            return False
        return self._close()

    # fields

    def add_field(self, field: str, md_path: str) -> bool:
        return self._write(
            "addField",
            "INSERT OR REPLACE INTO fields(field, path) VALUES(?, ?);",
            (field, md_path),
        ) is not None

    def update_field(self, field: str, md_path: str) -> bool:
        count = self._write(
            "updateField", "UPDATE fields SET path = ? WHERE field = ?;", (md_path, field)
        )
        return bool(count)

    def remove_field(self, field: str) -> bool:
        return self._write(
            "removeField", "DELETE FROM fields WHERE field = ?;", (field,)
        ) is not None

    def get_field_path(self, field: str) -> Optional[str]:
        rows = self._read(
            "getFieldPath", "SELECT path FROM fields WHERE field = ? LIMIT 1;", (field,)
        )
        return str(rows[0][0]) if rows else None

    def get_all_fields(self) -> dict[str, str]:
        rows = self._read("getAllFields", "SELECT field, path FROM fields;")
        return {str(field): str(path) for field, path in rows}

    def all_fields(self) -> list[str]:
        rows = self._read("allFields", "SELECT field FROM fields ORDER BY field ASC;")
        return [str(field) for (field,) in rows]

    # months

    def add_month(self, month: int, md_path: str) -> bool:
        return self._write(
            "addMonth",
            "INSERT OR REPLACE INTO months(month, path) VALUES(?, ?);",
            (int(month), md_path),
        ) is not None

    def update_month(self, month: int, md_path: str) -> bool:
        count = self._write(
            "updateMonth",
            "UPDATE months SET path = ? WHERE month = ?;",
            (md_path, int(month)),
        )
        return bool(count)

    def remove_month(self, month: int) -> bool:
        return self._write(
            "removeMonth", "DELETE FROM months WHERE month = ?;", (int(month),)
        ) is not None

    def get_month_path(self, month: int) -> Optional[str]:
        rows = self._read(
            "getMonthPath",
            "SELECT path FROM months WHERE month = ? LIMIT 1;",
            (int(month),),
        )
        return str(rows[0][0]) if rows else None

    def get_all_months(self) -> dict[int, str]:
        rows = self._read("getAllMonths", "SELECT month, path FROM months;")
        return {int(month): str(path) for month, path in rows}

    def month_exists(self, month: int) -> bool:
        rows = self._read(
            "monthExists", "SELECT 1 FROM months WHERE month = ? LIMIT 1;", (int(month),)
        )
        return bool(rows)

    def clear_months(self) -> bool:
        return self._write("clearMonths", "DELETE FROM months;") is not None

    def all_months(self) -> list[int]:
        rows = self._read("allMonths", "SELECT month FROM months ORDER BY month ASC;")
        return [int(month) for (month,) in rows]

    # dates

    def add_date(self, day: date, md_path: str) -> bool:
        return self._write(
            "addDate",
            "INSERT OR REPLACE INTO dates(date, path) VALUES(?, ?);",
            (_iso(day), md_path),
        ) is not None

    def update_date(self, day: date, md_path: str) -> bool:
        count = self._write(
            "updateDate", "UPDATE dates SET path = ? WHERE date = ?;", (md_path, _iso(day))
        )
        return bool(count)

    def remove_date(self, day: date) -> bool:
        return self._write(
            "removeDate", "DELETE FROM dates WHERE date = ?;", (_iso(day),)
        ) is not None

    def get_date_path(self, day: date) -> Optional[str]:
        rows = self._read(
            "getDatePath", "SELECT path FROM dates WHERE date = ? LIMIT 1;", (_iso(day),)
        )
        return str(rows[0][0]) if rows else None

    def get_all_dates(self) -> dict[date, str]:
        result: dict[date, str] = {}
        for text, path in self._read("getAllDates", "SELECT date, path FROM dates;"):
            day = _parse_iso(str(text))
            if day is None:
                log.warning("Invalid date format in DB: %s", text)
                continue
            result[day] = str(path)
        return result

    def all_dates(self) -> list[date]:
        result: list[date] = []
        for (text,) in self._read("allDates", "SELECT date FROM dates ORDER BY date ASC;"):
            day = _parse_iso(str(text))
            if day is None:
                log.warning("Invalid date format in DB: %s", text)
                continue
            result.append(day)
        return result