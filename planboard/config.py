"""Start-up configuration kept in a JSON file and filled in by init items."""

from __future__ import annotations

import json
import logging
import os
import sys
from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional

log = logging.getLogger(__name__)


class ConfigError(RuntimeError):
    """The configuration could not be read, written or completed."""


class InitItem(ABC):
    """One configuration key and how to obtain or validate its value."""

    @abstractmethod
    def item_name(self) -> str:
        """The configuration key this item owns."""

    @abstractmethod
    def load_if_already(self, value: Any) -> bool:
        """Act on a value already present and valid; False on failure."""

    @abstractmethod
    def check_if_item_invalid(self, value: Any) -> bool:
        """True if the present value cannot be used."""

    @abstractmethod
    def load_if_item_invalid(self, value: Any) -> Any:
        """A replacement for an unusable value, or None."""

    @abstractmethod
    def load_if_key_missing(self) -> Any:
        """A value for a key absent from the configuration, or None."""

    @abstractmethod
    def is_critical(self) -> bool:
        """Whether the program cannot run without this item."""


def _default_config_path() -> str:
    base = os.path.dirname(os.path.abspath(sys.argv[0])) if sys.argv and sys.argv[0] else os.getcwd()
    return os.path.join(base, "configs", "config.json")


class PreInitHelper:
    """Loads the configuration file and lets each init item fill in its key."""

    def __init__(
        self,
        items: Iterable[Optional[InitItem]],
        config_path: Optional[str | os.PathLike] = None,
    ) -> None:
        items = [item for item in items]
        if not items:
            raise ConfigError("init session is empty, this is unexpected!")
        self.config_path = os.fspath(config_path) if config_path is not None else _default_config_path()
        self.items: dict[str, InitItem] = {
            item.item_name(): item for item in items if item is not None
        }
        self.item_status: dict[str, bool] = {}
        self._config: dict[str, Any] = {}
        self._cache: dict[str, Any] = {}

    def __enter__(self) -> "PreInitHelper":
        return self

    def __exit__(self, *exc_info: object) -> None:
        try:
            self.save()
        except ConfigError as err:
            log.error("Error occurs, file will not save: %s", err)

    def _read_config_file(self) -> bool:
        if not os.path.exists(self.config_path):
            return False
        try:
            with open(self.config_path, encoding="utf-8") as handle:
                data = handle.read()
        except OSError as err:
            raise ConfigError(f"Cannot open config file: {self.config_path}") from err
        try:
            doc = json.loads(data)
        except json.JSONDecodeError as err:
            raise ConfigError(f"error parsing: {err}") from err
        if not isinstance(doc, dict):
            raise ConfigError("error parsing: document is not an object")
        self._config = doc
        return True

    def _write(self, obj: dict[str, Any]) -> None:
        folder = os.path.dirname(os.path.abspath(self.config_path))
        try:
            os.makedirs(folder, exist_ok=True)
        except OSError as err:
            raise ConfigError(f"Failed to create configs folder: {folder}") from err
        try:
            with open(self.config_path, "w", encoding="utf-8") as handle:
                json.dump(obj, handle, indent=4, default=str)
        except OSError as err:
            raise ConfigError(f"Cannot open config file: {self.config_path}") from err

    def _recreate_config(self) -> None:
        self._write({})
        self._config = {}
        self._cache = {}

    def _fail_if_critical(self, item: InitItem, ok: bool) -> None:
        if not ok and item.is_critical():
            raise ConfigError(
                f"As the item {item.item_name()} is critical, the application cannot continue"
            )

    def init(self) -> bool:
        """Read the file, run every item, write the result back; True if all went well.

        A file that cannot be read or parsed is replaced by an empty one and
        False is returned. A critical item that fails raises ConfigError.
        """
        try:
            self._read_config_file()
        except ConfigError as err:
            log.warning("config json error: %s; creating a new config json", err)
            self._recreate_config()
            return False

        self._cache = dict(self._config)
        all_ok = True
        for name in sorted(self.items):
            item = self.items[name]
            if name in self._config:
                value = self._config[name]
                if item.check_if_item_invalid(value):
                    replacement = item.load_if_item_invalid(value)
                    ok = replacement is not None
                    self._fail_if_critical(item, ok)
                    self._cache[name] = replacement
                    self._config[name] = replacement
                else:
                    ok = bool(item.load_if_already(value))
                    self._fail_if_critical(item, ok)
                self.item_status[name] = ok
                all_ok &= ok
            else:
                value = item.load_if_key_missing()
                self._cache[name] = value
                self._config[name] = value
                self.item_status[name] = True

        try:
            self.save()
        except ConfigError as err:
            log.warning("Failed to save updated config file: %s", err)
            all_ok = False
        return all_ok

    def query(self, key: str) -> Any:
        """The current value of a key, or None."""
        if key not in self._cache:
            self._cache[key] = self._config.get(key)
        return self._cache[key]

    def update(self, key: str, value: Any, save_now: bool = True) -> bool:
        """Change an existing key; False if the key is unknown or saving fails."""
        if key not in self._config:
            log.warning("Config key not found: %s", key)
            return False
        self._config[key] = value
        self._cache[key] = value
        if save_now:
            try:
                self.save()
            except ConfigError as err:
                log.warning("Failed to save config file after update: %s", err)
                return False
        return True

    def save(self) -> bool:
        """Write every known value to the configuration file."""
        self._config.update(self._cache)
        self._write(self._config)
        return True