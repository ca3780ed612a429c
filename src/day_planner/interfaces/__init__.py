"""User-facing interfaces."""

from .cli import PlannerCLI, main as cli_main

__all__ = ["PlannerCLI", "cli_main"]
