"""Reading and rewriting plan files by path or by file URL."""

from __future__ import annotations

import os
from urllib.parse import urlparse
from urllib.request import url2pathname


def read_from_url(url: str) -> str:
    """Read the text a file URL points at; only local files are supported."""
    parsed = urlparse(str(url))
    if parsed.scheme.lower() != "file":
        raise ValueError("Current can not handle non local file")
    path = url2pathname(parsed.path)
    if parsed.netloc and parsed.netloc != "localhost":
        path = "//" + parsed.netloc + path
    return read_from_local_path(path)


def read_from_local_path(path: str | os.PathLike) -> str:
    """Read a whole text file; raises OSError when it cannot be read."""
    try:
        with open(path, encoding="utf-8") as handle:
            return handle.read()
    except OSError as err:
        raise OSError(f"Can not handle file: {os.fspath(path)}") from err


def truncate_write(path: str | os.PathLike, text: str) -> None:
    """Replace the file's contents with the text, written as UTF-8."""
    try:
        with open(path, "w", encoding="utf-8") as handle:
            handle.write(text)
    except OSError as err:
        raise OSError(f"Can not handle file: {os.fspath(path)}") from err