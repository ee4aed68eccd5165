# src/tasktrack/plugins/builtin/stats.py

"""`stats`: task totals, broken down by status."""

from __future__ import annotations

from collections import Counter

from tasktrack.core.command_models import ParsedArgs
from tasktrack.core.ports import PluginContext
from tasktrack.plugins.models import Plugin, PluginCommand


def format_stats(statuses: list[str]) -> list[str]:
    if not statuses:
        return ["No tasks found."]
    lines = [f"Total tasks: {len(statuses)}"]
    # Counter keeps first-seen order, matching the task list.
    for status, count in Counter(statuses).items():
        lines.append(f"  {status}: {count}")
    return lines


async def show_stats(args: ParsedArgs, ctx: PluginContext) -> None:
    state = await ctx.storage.load()
    for line in format_stats([t.status.value for t in state.tasks]):
        print(line)


plugin = Plugin(
    name="stats",
    version="1.0.0",
    commands=[
        PluginCommand(
            name="stats",
            description="Show statistics about tasks",
            usage="stats",
            execute=show_stats,
        )
    ],
)
