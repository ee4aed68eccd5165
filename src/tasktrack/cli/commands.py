# src/tasktrack/cli/commands.py

"""
Command classification.

Maps the first positional to a typed command:
- built-in short verbs (add/up/rm/ls) parse their own parameters,
- anything the plugin runtime knows becomes CommandPlugin (resolved at execute time),
- everything else is an unknown command.
"""

from __future__ import annotations

import sys
from datetime import datetime
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

from ..core.command_models import (
    Command,
    CommandAdd,
    CommandDelete,
    CommandList,
    CommandPlugin,
    CommandUpdate,
    ParsedArgs,
)
from ..errors import CommandError
from ..tasks.task_models import TaskStatus, parse_due_date

if TYPE_CHECKING:
    from ..plugins.runtime import PluginRuntime


class CommandActionShort(StrEnum):
    ADD = "add"
    UPDATE = "up"
    DELETE = "rm"
    LIST = "ls"


BUILTIN_VERBS = frozenset(v.value for v in CommandActionShort)

USAGE_LS = "ls"
USAGE_ADD = "add <title> [--detail <description>] [--due <YYYY-MM-DD>] [--status <todo|in-progress|done>]"
USAGE_UPDATE = (
    "up <id> [--title <title>] [--detail <description>] [--due <YYYY-MM-DD>] "
    "[--status <todo|in-progress|done>]"
)
USAGE_DELETE = "rm <id/*>"


def _prog_name() -> str:
    return Path(sys.argv[0]).name if sys.argv and sys.argv[0] else "tasktrack"


def usage(msg: str) -> NoReturn:
    """Print a usage line and hard-exit: missing required arguments are interactive misuse."""
    print(f"Usage: {_prog_name()} {msg}")
    raise SystemExit(1)


def _status_option(args: ParsedArgs) -> TaskStatus | None:
    raw = args.option_str("status")
    if raw is None:
        return None
    status = TaskStatus.parse(raw)
    if status is None:
        print(f"Invalid status: {raw}. Must be one of todo, in-progress, done.", file=sys.stderr)
    return status


def _due_option(args: ParsedArgs) -> datetime | None:
    raw = args.option_str("due")
    if raw is None:
        return None
    due = parse_due_date(raw)
    if due is None:
        print(f"Invalid due date: {raw}. Must be in YYYY-MM-DD format.", file=sys.stderr)
    return due


def parse_add(args: ParsedArgs) -> CommandAdd:
    if len(args.positionals) < 2:
        usage(USAGE_ADD)
    return CommandAdd(
        title=args.positionals[1],
        description=args.option_str("detail"),
        due=_due_option(args),
        status=_status_option(args),
    )


def parse_update(args: ParsedArgs) -> CommandUpdate:
    if len(args.positionals) < 2:
        usage(USAGE_UPDATE)
    return CommandUpdate(
        id=args.positionals[1],
        title=args.option_str("title"),
        description=args.option_str("detail"),
        due=_due_option(args),
        status=_status_option(args),
    )


def parse_delete(args: ParsedArgs) -> CommandDelete:
    if len(args.positionals) < 2:
        usage(USAGE_DELETE)
    return CommandDelete(id=args.positionals[1])


def parse_list(args: ParsedArgs) -> CommandList:
    return CommandList()


_PARSERS = {
    CommandActionShort.ADD: parse_add,
    CommandActionShort.UPDATE: parse_update,
    CommandActionShort.DELETE: parse_delete,
    CommandActionShort.LIST: parse_list,
}


def all_usages(runtime: PluginRuntime | None = None) -> list[str]:
    lines = [USAGE_ADD, USAGE_UPDATE, USAGE_DELETE, USAGE_LS]
    if runtime is not None:
        lines.extend(runtime.get_usage())
    return sorted(lines)


def print_commands(runtime: PluginRuntime | None = None) -> None:
    print("Available commands:")
    for line in all_usages(runtime):
        print(f"  {line}")


def parse_command(args: ParsedArgs, runtime: PluginRuntime | None = None) -> Command:
    if not args.positionals:
        print_commands(runtime)
        raise CommandError("Missing command action")

    verb = args.positionals[0]
    if verb in BUILTIN_VERBS:
        return _PARSERS[CommandActionShort(verb)](args)

    if runtime is not None and runtime.has_command(verb):
        return CommandPlugin(name=verb, raw_args=args)

    print_commands(runtime)
    raise CommandError(f"Unknown command action {verb}")
