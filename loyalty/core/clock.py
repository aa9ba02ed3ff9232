"""Injectable time source.

Services take a ``Clock`` instead of calling ``datetime.now()`` so expiry
checks can be driven deterministically in tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime (naive values are assumed UTC)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime:
        """Current time as an aware UTC datetime."""


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FrozenClock(Clock):
    """Clock that only moves when told to."""

    def __init__(self, current: datetime | None = None) -> None:
        self._current = as_utc(current) if current else datetime.now(timezone.utc)

    def now(self) -> datetime:
        return self._current

    def set(self, value: datetime) -> None:
        self._current = as_utc(value)

    def advance(self, delta: timedelta) -> datetime:
        self._current = self._current + delta
        return self._current


__all__ = ["Clock", "SystemClock", "FrozenClock", "as_utc"]
