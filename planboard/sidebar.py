"""State of the field and month side panels."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

log = logging.getLogger(__name__)

MIN_YEAR = 1900
MAX_YEAR = 3000


class FieldList:
    """The field names shown in the side panel, with at most one selected."""

    def __init__(self, fields: Iterable[str] = ()) -> None:
        self.checked: dict[str, bool] = {}
        self.current: str = ""
        self.set_fields(fields)

    @property
    def fields(self) -> list[str]:
        """The field names in display order."""
        return list(self.checked)

    def set_fields(self, fields: Iterable[str]) -> None:
        """Replace every field and clear the selection."""
        self.checked = {}
        self.current = ""
        for name in fields:
            self.checked[name] = False

    def add_field(self, field: str) -> bool:
        """Append a field; False if it is already shown."""
        if field in self.checked:
            return False
        self.checked[field] = False
        return True

    def remove_field(self, field: str) -> bool:
        """Drop a field, clearing the selection if it was selected."""
        if field not in self.checked:
            return False
        if self.current == field:
            self.current = ""
        del self.checked[field]
        return True

    def select_field(self, field: str) -> None:
        """Make the field the selected one."""
        if field == self.current:
            return
        if self.current and self.current in self.checked:
            self.checked[self.current] = False
        if field in self.checked:
            self.checked[field] = True
        else:
            log.warning("select_field: unknown field %s", field)
        self.current = field

    @property
    def selected(self) -> Optional[str]:
        """The selected field, or None."""
        return self.current or None


def composed_month(year: int, month: int) -> int:
    """The month key used for monthly plans: year times a hundred plus month."""
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValueError(f"year must be between {MIN_YEAR} and {MAX_YEAR}")
    if not 1 <= month <= 12:
        raise ValueError("month must be between 1 and 12")
    return year * 100 + month