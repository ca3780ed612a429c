"""Clock port supplying the current local civil time."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable

Clock = Callable[[], datetime]


def system_clock() -> datetime:
    """Current local wall-clock time, naive, truncated to the minute."""
    return datetime.now().replace(second=0, microsecond=0)


class FixedClock:
    """Manually advanced clock for tests and replays."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta: float) -> datetime:
        self.now = self.now + timedelta(**delta)
        return self.now


__all__ = ["Clock", "FixedClock", "system_clock"]
