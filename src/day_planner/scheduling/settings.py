"""Tunable constants of the day-schedule synthesis."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class PlannerSettings:
    chunk_ceiling_minutes: int = 120  # Upper bound of a task's daily goal
    min_chunk_minutes: int = 30
    break_minutes: int = 5
    buffer_days: int = 1
    revision_block_minutes: int = 60
    min_revision_block_minutes: int = 30
    break_label: str = "Short Break"
    revision_label: str = "Revise Old Chapters"

    @classmethod
    def from_config(cls, config: Optional[Mapping[str, Any]] = None) -> "PlannerSettings":
        """Build settings from the ``planner`` section of a loaded configuration.

        Unknown keys are ignored and missing keys keep their defaults.
        """
        if config is None:
            from day_planner.utils.config import get_config

            config = get_config()
        section = config.get("planner") or {}
        known = {field.name for field in fields(cls)}
        return cls(**{key: value for key, value in section.items() if key in known})


__all__ = ["PlannerSettings"]
