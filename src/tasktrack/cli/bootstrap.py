# src/tasktrack/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- builds the storage from settings,
- creates the process-scoped PluginRuntime and loads plugin directories,
- wires both into a TaskManager.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..config import Settings, get_settings
from ..core.ports import PluginContext, Storage
from ..core.task_manager import TaskManager
from ..plugins.runtime import PluginRuntime
from ..tasks.task_store import FileStorage
from .commands import BUILTIN_VERBS

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class App:
    settings: Settings
    storage: Storage
    runtime: PluginRuntime
    task_manager: TaskManager


def create_runtime(storage: Storage) -> PluginRuntime:
    # Built-in verbs are reserved so a plugin can never shadow them.
    return PluginRuntime(PluginContext(storage=storage), reserved_names=BUILTIN_VERBS)


async def create_app(*, settings: Settings | None = None, storage: Storage | None = None) -> App:
    """
    Build the app and load plugins.

    Keeping settings/storage injectable makes the app easier to test.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()
    if storage is None:
        storage = FileStorage(settings.data_file)

    runtime = create_runtime(storage)
    for plugins_dir in settings.plugin_dirs():
        await runtime.load_all(plugins_dir)

    logger.debug("Plugin commands available: %s", sorted(runtime.commands))
    return App(
        settings=settings,
        storage=storage,
        runtime=runtime,
        task_manager=TaskManager(storage, runtime),
    )
