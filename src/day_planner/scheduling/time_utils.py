"""Shared helpers for the millisecond civil-time axis used by the scheduler.

Timestamps count milliseconds from the naive ``1970-01-01T00:00`` of the
local calendar. There is no UTC offset and no DST on this axis, so every
day is exactly ``MILLIS_IN_DAY`` long.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta

MILLIS_IN_MINUTE = 60 * 1000
MILLIS_IN_HOUR = 60 * MILLIS_IN_MINUTE
MILLIS_IN_DAY = 24 * MILLIS_IN_HOUR

_CIVIL_EPOCH = datetime(1970, 1, 1)


def to_local_naive(dt: datetime) -> datetime:
    """Drop tzinfo after converting an aware datetime to local time."""
    if dt.tzinfo is not None:
        return dt.astimezone().replace(tzinfo=None)
    return dt


def to_millis(dt: datetime) -> int:
    delta = to_local_naive(dt) - _CIVIL_EPOCH
    return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000


def from_millis(millis: int) -> datetime:
    return _CIVIL_EPOCH + timedelta(milliseconds=millis)


def start_of_day_millis(day: date) -> int:
    return to_millis(datetime.combine(day, time.min))


def millis_to_minutes(millis: int) -> float:
    return millis / MILLIS_IN_MINUTE


def days_between(later: datetime, earlier: datetime) -> float:
    """Signed, fractional number of days from ``earlier`` to ``later``."""
    return (to_millis(later) - to_millis(earlier)) / MILLIS_IN_DAY


__all__ = [
    "MILLIS_IN_MINUTE",
    "MILLIS_IN_HOUR",
    "MILLIS_IN_DAY",
    "days_between",
    "from_millis",
    "millis_to_minutes",
    "start_of_day_millis",
    "to_local_naive",
    "to_millis",
]
