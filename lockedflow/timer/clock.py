"""Monotonic clock sources for the timer engine.

The engine never calls ``time`` directly; it reads whichever ``Clock`` it
was built with.  Production code uses ``MonotonicClock``.  Tests (and
anything that wants to replay time) use ``ManualClock`` and move it
forward explicitly.
"""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Monotonic clock abstraction."""

    def now(self) -> float:
        """Return monotonic seconds."""


class MonotonicClock:
    """Production clock backed by ``time.monotonic()``."""

    def now(self) -> float:
        return time.monotonic()


class ManualClock:
    """A clock that only moves when told to."""

    def __init__(self, start: float = 0.0) -> None:
        self._now: float = start

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError(f"clock cannot go backwards (advance by {seconds})")
        self._now += seconds

    def advance_ms(self, milliseconds: int) -> None:
        self.advance(milliseconds / 1000)

    def set(self, seconds: float) -> None:
        """Jump to an absolute reading (must not be earlier than now)."""
        if seconds < self._now:
            raise ValueError(
                f"clock cannot go backwards ({seconds} < {self._now})"
            )
        self._now = seconds
