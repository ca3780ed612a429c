"""Storage layer - planner persistence behind a load/save port."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from day_planner.storage.base import PlannerStore, Snapshot
from day_planner.storage.json_store import JsonFilePlannerStore
from day_planner.storage.planner_store import SQLitePlannerStore
from day_planner.storage.sqlite import SQLiteStore
from day_planner.utils.exceptions import ConfigError


def open_store(config: Optional[Mapping[str, Any]] = None) -> PlannerStore:
    """Instantiate the store selected by ``storage.backend`` (``sqlite`` or ``json``).

    Raises ``ConfigError`` for any other backend name.
    """
    if config is None:
        from day_planner.utils.config import get_config

        config = get_config()
    storage = config.get("storage") or {}
    backend = str(storage.get("backend", "sqlite")).lower()
    if backend == "json":
        return JsonFilePlannerStore(storage.get("json_path", "~/.day_planner/planner.json"))
    if backend != "sqlite":
        raise ConfigError(f"Unknown storage backend: {backend}")
    return SQLitePlannerStore(storage.get("db_path", "~/.day_planner/planner.db"))


__all__ = [
    "JsonFilePlannerStore",
    "PlannerStore",
    "SQLitePlannerStore",
    "SQLiteStore",
    "Snapshot",
    "open_store",
]
