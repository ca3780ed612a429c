"""Structured logging setup for Day Planner.

Console output is rendered by Rich; when a log directory is configured an
additional JSONL sink is written per day. Modules obtain context-aware
structlog loggers through :func:`get_logger`.
"""

from __future__ import annotations

import logging
import os
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import structlog
from structlog.contextvars import merge_contextvars
from rich.console import Console

__all__ = [
    "configure_logging",
    "get_logger",
    "logger",
]

_CONFIGURED = False
_CONSOLE = Console(soft_wrap=True, stderr=True)
_PACKAGE_PREFIX = "day_planner"

_LEVEL_STYLES: Dict[str, str] = {
    "CRITICAL": "bold white on red",
    "ERROR": "bold red",
    "WARNING": "bold yellow",
    "INFO": "bold blue",
    "DEBUG": "dim cyan",
    "NOTSET": "dim",
}

_LEVEL_ICONS: Dict[str, str] = {
    "CRITICAL": "✗",
    "ERROR": "✗",
    "WARNING": "⚠",
    "INFO": "ℹ",
    "DEBUG": "⚙",
    "NOTSET": "·",
}


class ThirdPartyFilter(logging.Filter):
    """Only let WARNING and above through for loggers outside the package."""

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - noise reduction
        if record.name.startswith(_PACKAGE_PREFIX):
            return True
        return record.levelno >= logging.WARNING


class RichConsoleHandler(logging.Handler):
    """Stream handler that delegates rendering to Rich."""

    def __init__(self) -> None:
        super().__init__()
        self.console = _CONSOLE

    def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover - thin wrapper
        try:
            message = self.format(record)
            self.console.print(message, markup=True, highlight=False, overflow="ignore")
        except Exception:  # pragma: no cover - safety net
            self.handleError(record)


class EventDelta:
    """Add time delta since previous log entry for the same logger name."""

    def __init__(self) -> None:
        self._last_seen: Dict[str, float] = {}

    def __call__(
        self,
        logger: Any,
        name: str,
        event_dict: Dict[str, Any],
    ) -> Dict[str, Any]:
        now = time.monotonic()
        last = self._last_seen.get(name, now)
        event_dict["delta_ms"] = int((now - last) * 1000)
        self._last_seen[name] = now
        return event_dict


def _level_markup(level: str) -> str:
    style = _LEVEL_STYLES.get(level, "white")
    icon = _LEVEL_ICONS.get(level, "·")
    short_level = level[:4] if level != "WARNING" else "WARN"
    return f"[{style}]{icon} {short_level:<4}[/]"


def _format_delta(delta_ms: Optional[int]) -> str:
    if delta_ms is None:
        return "+000ms"
    if delta_ms >= 1000:
        return f"+{delta_ms / 1000:.1f}s"
    return f"+{delta_ms:03d}ms"


def _format_pairs(pairs: Iterable[tuple[str, Any]]) -> str:
    formatted = []
    for key, value in pairs:
        if isinstance(value, (dict, list, tuple)):
            formatted.append(f"{key}={value!r}")
        elif isinstance(value, str) and " " in value:
            formatted.append(f"{key}=\"{value}\"")
        else:
            formatted.append(f"{key}={value}")
    return " ".join(formatted)


def _console_renderer(
    logger: logging.Logger,
    name: str,
    event_dict: Dict[str, Any],
) -> str:
    timestamp = event_dict.pop("timestamp", None)
    level = event_dict.pop("level", "INFO").upper()
    delta_ms = event_dict.pop("delta_ms", None)
    component = event_dict.pop("logger", name)
    event = event_dict.pop("event", "")

    if isinstance(timestamp, str):
        ts_text = timestamp.split("T")[-1]
        if "." in ts_text:
            ts_text = ts_text.rsplit(".", 1)[0]
    else:
        ts_text = datetime.now().strftime("%H:%M:%S")

    if component.startswith(f"{_PACKAGE_PREFIX}."):
        component = component[len(_PACKAGE_PREFIX) + 1 :]

    pairs = _format_pairs(sorted(event_dict.items()))

    prefix = " | ".join(
        (
            f"[dim white]{ts_text}[/]",
            _level_markup(level),
            f"[bold magenta]{component}[/]",
            f"[dim cyan]{_format_delta(delta_ms)}[/]",
        )
    )

    if pairs:
        return f"{prefix} | [white]{event}[/] [dim]{pairs}[/]"
    return f"{prefix} | [white]{event}[/]"


def _json_renderer(
    logger: logging.Logger,
    name: str,
    event_dict: Dict[str, Any],
) -> str:
    return structlog.processors.JSONRenderer(sort_keys=False)(logger, name, event_dict)


def _common_processors() -> list[Any]:
    """Processors shared by structlog and foreign (stdlib) log records.

    ``wrap_for_formatter`` belongs only to the structlog chain, never to the
    ``foreign_pre_chain``.
    """
    return [
        merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
        EventDelta(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _resolve_log_dir(log_dir: Optional[Path | str]) -> Optional[Path]:
    raw = log_dir or os.getenv("DAY_PLANNER_LOG_DIR")
    if not raw:
        return None
    directory = Path(raw).expanduser().resolve()
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def configure_logging(
    level: Optional[str] = None,
    log_dir: Optional[Path | str] = None,
    *,
    reconfigure: bool = False,
) -> None:
    """Configure console (and optional JSONL file) logging.

    The first call wins unless ``reconfigure`` is set, which replaces the
    handlers, e.g. once the CLI has read the ``logging`` config section.
    """
    global _CONFIGURED
    if _CONFIGURED and not reconfigure:
        return

    resolved_level = (level or os.getenv("DAY_PLANNER_LOG_LEVEL", "WARNING")).upper()

    console_handler = RichConsoleHandler()
    console_handler.setLevel(resolved_level)
    console_handler.addFilter(ThirdPartyFilter())
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_console_renderer,
            foreign_pre_chain=_common_processors(),
        )
    )
    handlers: list[logging.Handler] = [console_handler]

    directory = _resolve_log_dir(log_dir)
    if directory is not None:
        file_handler = logging.FileHandler(directory / f"{datetime.now():%Y%m%d}.log", encoding="utf-8")
        file_handler.setLevel(resolved_level)
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=_json_renderer,
                foreign_pre_chain=_common_processors(),
            )
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=getattr(logging, resolved_level, logging.WARNING),
        handlers=handlers,
        force=True,
    )

    structlog.configure(
        processors=_common_processors() + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    _CONFIGURED = True


def get_logger(name: Optional[str] = None, **context: Any) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to the given name and context."""
    configure_logging()
    base = structlog.get_logger(name or _PACKAGE_PREFIX)
    if context:
        return base.bind(**context)
    return base


logger = get_logger()
