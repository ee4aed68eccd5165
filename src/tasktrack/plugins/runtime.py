# src/tasktrack/plugins/runtime.py

"""
Plugin runtime.

Owns the three per-process registries:
- commands:   command name -> PluginCommand (first registration wins)
- extensions: action name  -> [CommandExtension, ...] in load order
- plugins:    resident plugins in load order (for shutdown)

Lifecycle: load_all()/load_plugins() once at startup, dispatch during the run,
shutdown_all() once at exit. Nothing here is a module-level singleton.
"""

from __future__ import annotations

import hashlib
import importlib.util
import logging
import sys
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType, ModuleType
from typing import TYPE_CHECKING, Any

from ..errors import PluginLoadError
from .models import CommandExtension, Plugin, PluginCommand, maybe_await, normalize_plugin, resolve_descriptor

if TYPE_CHECKING:
    from ..core.command_models import ParsedArgs
    from ..core.ports import PluginContext

logger = logging.getLogger(__name__)

_MODULE_PREFIX = "tasktrack_plugin_"


def discover_plugin_files(plugins_dir: str | Path | None) -> list[Path]:
    """Sorted *.py candidates in plugins_dir; empty when the directory is absent."""
    if plugins_dir is None:
        return []
    root = Path(plugins_dir)
    if not root.is_dir():
        return []
    return sorted(p for p in root.glob("*.py") if p.is_file() and not p.name.startswith("_"))


def plugin_module_name(path: Path) -> str:
    """Unique sys.modules key: same-named files in different directories must not collide."""
    digest = hashlib.sha1(str(path.resolve().parent).encode("utf-8")).hexdigest()[:8]
    return f"{_MODULE_PREFIX}{digest}_{path.stem}"


def import_plugin_module(path: Path) -> ModuleType:
    module_name = plugin_module_name(path)
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise PluginLoadError(path, "not a loadable Python module")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(module_name, None)
        raise
    return module


class PluginRuntime:
    def __init__(self, ctx: PluginContext, *, reserved_names: Iterable[str] = ()) -> None:
        self._ctx = ctx
        self._reserved = frozenset(reserved_names)
        self._plugins: list[Plugin] = []
        self._commands: dict[str, PluginCommand] = {}
        self._extensions: dict[str, list[CommandExtension]] = {}

    @property
    def plugins(self) -> tuple[Plugin, ...]:
        return tuple(self._plugins)

    @property
    def commands(self) -> Mapping[str, PluginCommand]:
        return MappingProxyType(self._commands)

    def extensions_for(self, action: str) -> tuple[CommandExtension, ...]:
        return tuple(self._extensions.get(action, ()))

    # ---- loading ----

    async def load_all(self, plugins_dir: str | Path | None) -> int:
        """
        Discover and load every plugin file in plugins_dir.

        One candidate failing (import error, bad descriptor, initialize raising) is
        logged and skipped; the rest of the batch still loads.
        Returns the number of plugins that became resident.
        """
        loaded = 0
        for path in discover_plugin_files(plugins_dir):
            try:
                module = import_plugin_module(path)
                plugin = normalize_plugin(resolve_descriptor(module))
            except Exception:
                logger.exception("Failed to load plugin file %s; skipping.", path)
                continue

            if await self._load_one(plugin, source=str(path)):
                loaded += 1

        if loaded:
            logger.info("Loaded %d plugin(s) from %s", loaded, plugins_dir)
        return loaded

    async def load_plugins(self, plugins: Iterable[Any]) -> int:
        """Register an explicit list of descriptors (any shape normalize_plugin accepts)."""
        loaded = 0
        for raw in plugins:
            try:
                plugin = normalize_plugin(raw)
            except Exception:
                logger.exception("Invalid plugin descriptor %r; skipping.", raw)
                continue
            if await self._load_one(plugin, source=plugin.name or repr(raw)):
                loaded += 1
        return loaded

    async def _load_one(self, plugin: Plugin, *, source: str) -> bool:
        if not plugin.name or not plugin.version:
            logger.warning("Skipping invalid plugin at %s: missing name or version", source)
            return False

        # Filled as registration proceeds so a failure at any step rolls back cleanly.
        added_commands: list[str] = []
        added_extensions: list[CommandExtension] = []
        try:
            self._register_commands(plugin, added_commands)
            self._register_extensions(plugin, added_extensions)
            if plugin.initialize is not None:
                await maybe_await(plugin.initialize(self._ctx))
        except Exception:
            logger.exception("Plugin %s failed to load; unloading it.", plugin.name)
            self._unregister(added_commands, added_extensions)
            return False

        self._plugins.append(plugin)
        logger.debug(
            "Plugin %s %s loaded (commands=%d extensions=%d)",
            plugin.name,
            plugin.version,
            len(added_commands),
            len(added_extensions),
        )
        return True

    def _register_commands(self, plugin: Plugin, added: list[str]) -> None:
        for cmd in plugin.commands:
            if cmd.name in self._reserved or cmd.name in self._commands:
                logger.warning(
                    "Plugin %s command %s conflicts with existing command. Skipping.",
                    plugin.name,
                    cmd.name,
                )
                continue
            self._commands[cmd.name] = cmd
            added.append(cmd.name)

    def _register_extensions(self, plugin: Plugin, added: list[CommandExtension]) -> None:
        for ext in plugin.extensions:
            self._extensions.setdefault(ext.command, []).append(ext)
            added.append(ext)

    def _unregister(self, command_names: list[str], extensions: list[CommandExtension]) -> None:
        for name in command_names:
            self._commands.pop(name, None)
        for ext in extensions:
            bucket = self._extensions.get(ext.command)
            if not bucket:
                continue
            # identity match: another plugin may register an equal-looking extension
            for i, existing in enumerate(bucket):
                if existing is ext:
                    del bucket[i]
                    break
            if not bucket:
                del self._extensions[ext.command]

    # ---- command registry ----

    def has_command(self, name: str) -> bool:
        return name in self._commands

    def get_command(self, name: str) -> PluginCommand | None:
        return self._commands.get(name)

    def get_usage(self) -> list[str]:
        return [cmd.usage or cmd.name for cmd in self._commands.values()]

    # ---- hook pipeline ----

    async def run_before_execute(self, action: str, args: ParsedArgs) -> None:
        """Run before-hooks for action sequentially; the first exception aborts the rest."""
        for ext in self.extensions_for(action):
            if ext.before_execution is not None:
                await maybe_await(ext.before_execution(args, self._ctx))

    async def run_after_execute(self, action: str, args: ParsedArgs) -> None:
        for ext in self.extensions_for(action):
            if ext.after_execution is not None:
                await maybe_await(ext.after_execution(args, self._ctx))

    # ---- shutdown ----

    async def shutdown_all(self) -> None:
        """Shut plugins down in load order; one failing does not stop the others."""
        for plugin in self._plugins:
            if plugin.shutdown is None:
                continue
            try:
                await maybe_await(plugin.shutdown())
            except Exception:
                logger.exception("Plugin %s failed to shut down.", plugin.name)
