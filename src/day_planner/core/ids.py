"""Identifier generators for tasks, fixed blocks and scheduled activities."""

from __future__ import annotations

import itertools
import uuid
from typing import Protocol


class IdGenerator(Protocol):
    def new_id(self, prefix: str) -> str:
        ...


class UuidIdGenerator:
    """Random identifiers such as ``task_1f0c...``."""

    def new_id(self, prefix: str) -> str:
        return f"{prefix}_{uuid.uuid4().hex}"


class CounterIdGenerator:
    """Deterministic identifiers numbered per prefix (``sa_1``, ``sa_2``, ...)."""

    def __init__(self, start: int = 1):
        self._start = start
        self._counters: dict[str, itertools.count] = {}

    def new_id(self, prefix: str) -> str:
        counter = self._counters.setdefault(prefix, itertools.count(self._start))
        return f"{prefix}_{next(counter)}"


__all__ = ["IdGenerator", "UuidIdGenerator", "CounterIdGenerator"]
