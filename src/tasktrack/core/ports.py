# src/tasktrack/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task manager and plugins depend on the Storage Protocol instead of FileStorage,
so tests can swap in an in-memory store.
"""

from dataclasses import dataclass
from typing import Protocol

from ..tasks.task_models import State


class Storage(Protocol):
    """Whole-document persistence: no indexing, no caching."""

    async def load(self) -> State: ...

    async def save(self, state: State) -> None: ...


@dataclass(slots=True)
class PluginContext:
    """Handed to plugin commands, hooks and initialize(); hooks are not sandboxed."""

    storage: Storage
