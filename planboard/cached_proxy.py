"""A fixed set of prioritised policies that each may produce a value."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

from .errors import CachedProxyEmpty, DuplicateProxyRegistration, ProxyLevelInvalid

T = TypeVar("T")


class CachedProxyPolicy(ABC, Generic[T]):
    """One way of producing a value; returns None when it cannot."""

    @abstractmethod
    def factorized(self) -> Optional[T]:
        """Produce the value, or None on failure."""

    @abstractmethod
    def handlable(self) -> bool:
        """Whether this policy should be tried at all."""


class CachedProxy(Generic[T]):
    """Tries its policies in level order and returns the first result."""

    def __init__(self, levels: int = 3) -> None:
        if levels <= 0:
            raise ValueError("a proxy needs at least one level")
        self.levels = levels
        self._policies: list[Optional[CachedProxyPolicy[T]]] = [None] * levels

    def _check_level(self, level: int) -> None:
        if not 0 <= level < self.levels:
            raise ProxyLevelInvalid(level, self.levels)

    def register_policy(
        self,
        policy: Optional[CachedProxyPolicy[T]],
        level: int,
        allow_duplicate: bool = False,
    ) -> bool:
        """Place a policy at a level; replaces an existing one only if allowed."""
        self._check_level(level)
        if policy is None:
            raise CachedProxyEmpty("policy provided empty!")
        if self._policies[level] is not None and not allow_duplicate:
            raise DuplicateProxyRegistration("Proxy in level registered!")
        self._policies[level] = policy
        return True

    def remove_policy(self, policy: CachedProxyPolicy[T]) -> bool:
        """Remove the given policy object; True if it was registered."""
        for index, each in enumerate(self._policies):
            if each is not None and each is policy:
                self._policies[index] = None
                return True
        return False

    def remove_level(self, level: int) -> None:
        """Empty the given level."""
        self._check_level(level)
        self._policies[level] = None

    def factorized_one(self) -> Optional[T]:
        """Return the first result a handlable policy produces, or None."""
        for policy in self._policies:
            if policy is None or not policy.handlable():
                continue
            result = policy.factorized()
            if result is not None:
                return result
        return None