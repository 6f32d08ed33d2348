"""Exceptions shared across the package."""

from __future__ import annotations


class CachedProxyEmpty(RuntimeError):
    """A policy was expected but none was given."""


class DuplicateProxyRegistration(RuntimeError):
    """A proxy level already holds a policy."""


class ProxyLevelInvalid(ValueError):
    """A proxy level lies outside the range a proxy supports."""

    def __init__(self, level: int, max_level: int) -> None:
        self.level = level
        self.max_level = max_level
        super().__init__(
            f"Given the level {level}, but the valid levels are "
            f"between 0 and {max_level - 1}"
        )


class APODDataRequestFailed(RuntimeError):
    """Fetching the picture of the day, or its image, failed."""