"""Clock abstraction so time-dependent booking rules stay testable."""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock. Naive local time, matching the datetimes callers pass in."""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock:
    """Clock frozen at a given instant; move it with `set` or `advance`."""

    def __init__(self, instant: datetime):
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

    def set(self, instant: datetime) -> None:
        self._instant = instant

    def advance(self, delta: timedelta) -> None:
        self._instant = self._instant + delta
