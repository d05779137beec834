"""Kernel time – Clock protocol + implementations."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    """Port: abstract clock for deterministic testing."""

    def now(self) -> datetime: ...
    def timestamp(self) -> float: ...


class SystemClock:
    """Production clock that delegates to ``datetime.now(UTC)``."""

    def now(self) -> datetime:
        return datetime.now(UTC)

    def timestamp(self) -> float:
        return datetime.now(UTC).timestamp()


class FrozenClock:
    """Test clock pinned to a fixed point in time."""

    def __init__(self, fixed: datetime) -> None:
        self._fixed = fixed

    @classmethod
    def at_unix(cls, seconds: float) -> FrozenClock:
        """Build a clock pinned to *seconds* since the epoch."""
        return cls(datetime.fromtimestamp(seconds, tz=UTC))

    def now(self) -> datetime:
        return self._fixed

    def timestamp(self) -> float:
        return self._fixed.timestamp()

    def advance(self, **kwargs: int | float) -> None:
        """Advance the frozen time by the given ``timedelta`` kwargs."""
        self._fixed += timedelta(**kwargs)


def unix_seconds(clock: Clock | None = None) -> int:
    """Whole seconds since the epoch according to *clock* (system clock by default)."""
    return int((clock or SystemClock()).timestamp())


__all__ = ["Clock", "FrozenClock", "SystemClock", "unix_seconds"]
