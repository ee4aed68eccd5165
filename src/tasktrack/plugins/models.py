# src/tasktrack/plugins/models.py

"""
Plugin descriptor types and the load-boundary adapter.

A plugin file may expose its descriptor in one of three shapes:
- a module attribute `default`
- a module attribute `plugin`
- the module itself (module-level `name`, `version`, `commands`, ...)

Each shape may be a Plugin instance, a mapping, or any object with matching attributes.
normalize_plugin() turns all of them into the canonical Plugin dataclass; nothing
downstream of the loader looks at the raw shapes.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..core.command_models import ParsedArgs
    from ..core.ports import PluginContext

    CommandFn = Callable[[ParsedArgs, PluginContext], Awaitable[None] | None]
    HookFn = Callable[[ParsedArgs, PluginContext], Awaitable[None] | None]
    InitializeFn = Callable[[PluginContext], Awaitable[None] | None]
    ShutdownFn = Callable[[], Awaitable[None] | None]


@dataclass(slots=True, frozen=True)
class PluginCommand:
    name: str
    description: str
    execute: CommandFn
    usage: str = ""


@dataclass(slots=True, frozen=True)
class CommandExtension:
    """Before/after hooks bound to a built-in action name (add/update/delete/list)."""

    command: str
    description: str = ""
    before_execution: HookFn | None = None
    after_execution: HookFn | None = None


@dataclass(slots=True)
class Plugin:
    name: str
    version: str
    commands: list[PluginCommand] = field(default_factory=list)
    extensions: list[CommandExtension] = field(default_factory=list)
    initialize: InitializeFn | None = None
    shutdown: ShutdownFn | None = None


async def maybe_await(result: Any) -> Any:
    """Plugin callbacks may be plain functions or coroutine functions."""
    if inspect.isawaitable(result):
        return await result
    return result


def _field(obj: Any, key: str, default: Any = None) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(key, default)
    return getattr(obj, key, default)


def _first_field(obj: Any, *keys: str) -> Any:
    for key in keys:
        value = _field(obj, key)
        if value is not None:
            return value
    return None


def _optional_callable(obj: Any, *keys: str) -> Any:
    fn = _first_field(obj, *keys)
    if fn is None:
        return None
    if not callable(fn):
        raise TypeError(f"{keys[0]} must be callable, got {type(fn).__name__}")
    return fn


def _to_command(raw: Any) -> PluginCommand:
    if isinstance(raw, PluginCommand):
        return raw
    name = str(_field(raw, "name") or "")
    execute = _field(raw, "execute")
    if not name:
        raise TypeError("plugin command is missing a name")
    if not callable(execute):
        raise TypeError(f"plugin command {name!r} has no callable execute")
    return PluginCommand(
        name=name,
        description=str(_field(raw, "description") or ""),
        usage=str(_field(raw, "usage") or ""),
        execute=execute,
    )


def _to_extension(raw: Any) -> CommandExtension:
    if isinstance(raw, CommandExtension):
        return raw
    command = str(_field(raw, "command") or "")
    if not command:
        raise TypeError("command extension is missing its target command")
    return CommandExtension(
        command=command,
        description=str(_field(raw, "description") or ""),
        before_execution=_optional_callable(raw, "before_execution", "beforeExecution"),
        after_execution=_optional_callable(raw, "after_execution", "afterExecution"),
    )


def resolve_descriptor(module: Any) -> Any:
    """Pick the descriptor object out of a loaded module (default -> plugin -> module)."""
    for attr in ("default", "plugin"):
        value = getattr(module, attr, None)
        if value is not None:
            return value
    return module


def normalize_plugin(obj: Any) -> Plugin:
    """
    Coerce a raw descriptor into a Plugin.

    Missing name/version become "" so the runtime can report and skip them.
    Malformed commands/extensions raise TypeError, for Plugin instances too.
    """
    if isinstance(obj, Plugin):
        return Plugin(
            name=obj.name or "",
            version=obj.version or "",
            commands=[_to_command(c) for c in (obj.commands or [])],
            extensions=[_to_extension(e) for e in (obj.extensions or [])],
            initialize=_optional_callable(obj, "initialize"),
            shutdown=_optional_callable(obj, "shutdown"),
        )

    commands = [_to_command(c) for c in (_field(obj, "commands") or [])]
    extensions = [_to_extension(e) for e in (_field(obj, "extensions") or [])]

    return Plugin(
        name=str(_field(obj, "name") or ""),
        version=str(_field(obj, "version") or ""),
        commands=commands,
        extensions=extensions,
        initialize=_optional_callable(obj, "initialize"),
        shutdown=_optional_callable(obj, "shutdown"),
    )
