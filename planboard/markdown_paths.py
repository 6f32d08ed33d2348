"""Checks on paths chosen as markdown plan files."""

from __future__ import annotations

import os

_MARKDOWN_SUFFIXES = {"md", "markdown"}


def is_valid_markdown_path(path: str | os.PathLike | None) -> bool:
    """True if the path names an existing file ending in .md or .markdown."""
    if not path:
        return False
    path = os.fspath(path)
    if not path or not os.path.isfile(path):
        return False
    name = os.path.basename(path)
    if "." not in name:
        return False
    return name.rpartition(".")[2].lower() in _MARKDOWN_SUFFIXES