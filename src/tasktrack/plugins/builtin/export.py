# src/tasktrack/plugins/builtin/export.py

"""`export-json`: dump the task list in its on-disk JSON shape."""

from __future__ import annotations

import json

from tasktrack.core.command_models import ParsedArgs
from tasktrack.core.ports import PluginContext
from tasktrack.plugins.models import Plugin, PluginCommand


async def export_json(args: ParsedArgs, ctx: PluginContext) -> None:
    state = await ctx.storage.load()
    print(json.dumps([t.to_dict() for t in state.tasks], ensure_ascii=False, indent=2))


plugin = Plugin(
    name="export",
    version="1.0.0",
    commands=[
        PluginCommand(
            name="export-json",
            description="Export tasks as JSON",
            usage="export-json",
            execute=export_json,
        )
    ],
)
