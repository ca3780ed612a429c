"""Utility functions and helpers."""

from .config import Config, ConfigNode, get_config, load_config
from .display import format_block_time, format_clock, format_minutes, format_time_range, shorten
from .exceptions import ConfigError, PlannerError, StoreError, TimerError, ValidationError

__all__ = [
    "Config",
    "ConfigError",
    "ConfigNode",
    "PlannerError",
    "StoreError",
    "TimerError",
    "ValidationError",
    "format_block_time",
    "format_clock",
    "format_minutes",
    "format_time_range",
    "get_config",
    "load_config",
    "shorten",
]
