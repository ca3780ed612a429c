"""Custom exceptions for Day Planner"""

from typing import Optional


class PlannerError(Exception):
    """Base class for errors raised outside the scheduling core"""


class ValidationError(PlannerError):
    """Raised when task or fixed block input is rejected before scheduling"""

    def __init__(self, field: str, message: str):
        """Initialize ValidationError

        Args:
            field: Name of the offending input field
            message: Human-readable reason
        """
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class StoreError(PlannerError):
    """Raised when the persistent store cannot write"""


class TimerError(PlannerError):
    """Raised on elapsed-time tracker misuse"""

    def __init__(self, message: str, task_id: Optional[str] = None):
        super().__init__(message)
        self.task_id = task_id


class ConfigError(PlannerError):
    """Raised when configuration cannot be read or names an unknown option"""
