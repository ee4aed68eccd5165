# src/tasktrack/core/command_models.py

"""
Parsed command values shared by the CLI parser, the task manager and plugins.

ParsedArgs is the raw tokenizer output; the Command variants are what the task manager
executes. CommandPlugin only names a registered plugin command; the descriptor is
looked up at execute time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from ..tasks.task_models import TaskStatus

OptionValue = str | bool


@dataclass(slots=True)
class ParsedArgs:
    positionals: list[str] = field(default_factory=list)
    options: dict[str, OptionValue] = field(default_factory=dict)

    def option_str(self, key: str) -> str | None:
        """Return a string option, or None when absent or given as a bare flag."""
        value = self.options.get(key)
        return value if isinstance(value, str) else None


class CommandAction(StrEnum):
    """Canonical action names; extensions bind to these, not to the short verbs."""

    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"
    LIST = "list"
    PLUGIN = "plugin"


@dataclass(slots=True, frozen=True)
class CommandAdd:
    title: str
    description: str | None = None
    due: datetime | None = None
    status: TaskStatus | None = None
    action: CommandAction = CommandAction.ADD


@dataclass(slots=True, frozen=True)
class CommandUpdate:
    id: str
    title: str | None = None
    description: str | None = None
    due: datetime | None = None
    status: TaskStatus | None = None
    action: CommandAction = CommandAction.UPDATE


@dataclass(slots=True, frozen=True)
class CommandDelete:
    id: str
    action: CommandAction = CommandAction.DELETE


@dataclass(slots=True, frozen=True)
class CommandList:
    action: CommandAction = CommandAction.LIST


@dataclass(slots=True, frozen=True)
class CommandPlugin:
    name: str
    raw_args: ParsedArgs
    action: CommandAction = CommandAction.PLUGIN


Command = CommandAdd | CommandUpdate | CommandDelete | CommandList | CommandPlugin
