# src/tasktrack/tasks/task_store.py

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path

from ..errors import StorageError
from .task_models import State

logger = logging.getLogger(__name__)


class FileStorage:
    """
    JSON file task store.

    The whole State is one document: load() reads it, save() rewrites it.
    - a missing file loads as an empty State (tasks=[], next_id=1)
    - writes go to a .tmp sibling first and are swapped in with os.replace

    No locking: two processes writing the same file race, last save wins.
    """

    def __init__(self, file_path: str | Path = "tasks.json") -> None:
        self._path = Path(file_path)

    @property
    def path(self) -> Path:
        return self._path

    async def load(self) -> State:
        return await asyncio.to_thread(self._load_sync)

    async def save(self, state: State) -> None:
        await asyncio.to_thread(self._save_sync, state)

    # ---- sync implementations ----

    def _load_sync(self) -> State:
        try:
            raw = self._path.read_text("utf-8")
        except FileNotFoundError:
            logger.debug("No task file at %s; starting empty.", self._path)
            return State()

        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError("top-level JSON value must be an object")
            state = State.from_dict(data)
        except (ValueError, KeyError, TypeError) as e:
            raise StorageError(f"Malformed task file {self._path}: {e}") from e

        logger.debug("Loaded %d tasks from %s (next_id=%d)", len(state.tasks), self._path, state.next_id)
        return state

    def _save_sync(self, state: State) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_name(self._path.name + ".tmp")
        tmp.write_text(json.dumps(state.to_dict(), ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, self._path)
        logger.debug("Saved %d tasks to %s", len(state.tasks), self._path)
