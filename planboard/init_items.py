"""Init items for the task database and the default cover folder."""

from __future__ import annotations

import logging
import os
import sqlite3
from typing import Any, Callable, Optional

from .config import InitItem

log = logging.getLogger(__name__)

FolderChooser = Callable[[str], Optional[str]]

DB_FILE_NAME = "todo.db"


def _prompt_folder(prompt: str) -> Optional[str]:
    try:
        answer = input(f"{prompt}: ").strip()
    except EOFError:
        return None
    return answer or None


def _sqlite_problem(path: str) -> Optional[str]:
    """Why the path is not an openable SQLite database, or None if it is."""
    if not path:
        return "empty path"
    if not os.path.isfile(path):
        return f"file does not exist or not a file: {path}"
    try:
        conn = sqlite3.connect(path)
        try:
            conn.execute("PRAGMA schema_version;").fetchone()
        finally:
            conn.close()
    except sqlite3.Error as err:
        return str(err)
    return None


def try_open_sqlite(path: Any) -> bool:
    """Whether the path names an existing, openable SQLite database."""
    problem = _sqlite_problem("" if path is None else str(path))
    if problem is not None:
        log.debug("sqlite check failed: %s", problem)
        return False
    return True


class DatabaseInitItem(InitItem):
    """The task database: must exist and open, or is created in a chosen folder."""

    def __init__(self, choose_folder: Optional[FolderChooser] = None) -> None:
        self.choose_folder = choose_folder if choose_folder is not None else _prompt_folder
        self.db_path: Optional[str] = None

    def item_name(self) -> str:
        return "todo_db"

    def load_if_already(self, value: Any) -> bool:
        path = "" if value is None else str(value)
        if not try_open_sqlite(path):
            return False
        self.db_path = path
        return True

    def check_if_item_invalid(self, value: Any) -> bool:
        return not try_open_sqlite(value)

    def load_if_item_invalid(self, value: Any) -> Optional[str]:
        """Ask for a folder and use or create the database there."""
        return self.load_if_key_missing()

    def load_if_key_missing(self) -> Optional[str]:
        """Ask for a folder; use its todo.db if valid, or create a new one."""
        folder = self.choose_folder(f"Select folder to create {DB_FILE_NAME}")
        if not folder:
            return None
        new_path = os.path.join(folder, DB_FILE_NAME)
        if os.path.exists(new_path):
            problem = _sqlite_problem(new_path)
            if problem is not None:
                log.error("Existing file is not a valid sqlite DB: %s", problem)
                return None
        else:
            try:
                sqlite3.connect(new_path).close()
            except sqlite3.Error as err:
                log.error("Failed to create sqlite file at %s: %s", new_path, err)
                return None
        self.db_path = new_path
        return new_path

    def is_critical(self) -> bool:
        return True


class CoverFolderInitItem(InitItem):
    """The folder of fallback cover images; optional."""

    def __init__(self, choose_folder: Optional[FolderChooser] = None) -> None:
        self.choose_folder = choose_folder if choose_folder is not None else _prompt_folder

    def item_name(self) -> str:
        return "default_cover_folder"

    def load_if_already(self, value: Any) -> bool:
        return True

    def check_if_item_invalid(self, value: Any) -> bool:
        if value is None or isinstance(value, (dict, list)):
            return False
        path = str(value)
        if not path or not os.path.isdir(path):
            log.debug("dir is not existed or unable to handle")
            return True
        return False

    def _ask(self) -> Optional[str]:
        folder = self.choose_folder("Select a image folder to display")
        return folder or None

    def load_if_item_invalid(self, value: Any) -> Optional[str]:
        return self._ask()

    def load_if_key_missing(self) -> Optional[str]:
        return self._ask()

    def is_critical(self) -> bool:
        return False