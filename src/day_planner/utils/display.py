"""Shared formatting utilities for human-readable planner output."""

from __future__ import annotations

from datetime import datetime
from typing import Optional


def format_minutes(minutes: Optional[float]) -> str:
    """Turn a minute count into a compact string such as ``1h 45m``."""
    if minutes is None:
        return "—"

    minutes = int(abs(minutes))
    hours, mins = divmod(minutes, 60)

    parts: list[str] = []
    if hours:
        parts.append(f"{hours}h")
    if mins or not parts:
        parts.append(f"{mins}m")
    return " ".join(parts)


def format_clock(dt: datetime) -> str:
    """Render a time of day as ``HH:MM``."""
    return dt.strftime("%H:%M")


def format_time_range(start: datetime, end: datetime) -> str:
    # An end at the following midnight closes the day.
    end_text = "24:00" if end.date() > start.date() and end.time() == datetime.min.time() else format_clock(end)
    return f"{format_clock(start)} - {end_text}"


def format_block_time(hour: int, minute: int) -> str:
    return f"{hour:02d}:{minute:02d}"


def shorten(text: str, limit: int = 120) -> str:
    """Compress whitespace and truncate to a limit with ellipsis."""
    clean = " ".join(text.strip().split())
    if len(clean) <= limit:
        return clean
    return clean[: limit - 1].rstrip() + "…"


__all__ = [
    "format_minutes",
    "format_clock",
    "format_time_range",
    "format_block_time",
    "shorten",
]
