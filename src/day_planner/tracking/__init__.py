"""Elapsed-time tracking."""

from .timer import TaskTimer

__all__ = ["TaskTimer"]
