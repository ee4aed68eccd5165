# src/tasktrack/core/task_manager.py

"""
Command execution.

Built-in actions run inside the plugin hook pipeline:
    run_before_execute(action) -> handler -> run_after_execute(action)
keyed by the canonical action name (add/update/delete/list).

Plugin-routed commands are self-contained: they go straight to the registered
execute() and never trigger before/after hooks, even ones bound to the same name.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

from ..errors import CommandError
from ..plugins.models import maybe_await
from ..plugins.runtime import PluginRuntime
from ..tasks.task_models import State, Task, TaskStatus, utc_now
from .command_models import (
    Command,
    CommandAdd,
    CommandDelete,
    CommandList,
    CommandPlugin,
    CommandUpdate,
    ParsedArgs,
)
from .ports import PluginContext, Storage

logger = logging.getLogger(__name__)

_TABLE_COLUMNS = ("ID", "Status", "Title", "Due", "Detail")


def format_table(rows: Sequence[dict[str, str]], columns: Sequence[str] = _TABLE_COLUMNS) -> str:
    widths = {c: len(c) for c in columns}
    for row in rows:
        for c in columns:
            widths[c] = max(widths[c], len(row.get(c, "")))

    def line(values: dict[str, str]) -> str:
        return " | ".join(values.get(c, "").ljust(widths[c]) for c in columns).rstrip()

    sep = "-+-".join("-" * widths[c] for c in columns)
    out = [line({c: c for c in columns}), sep]
    out.extend(line(row) for row in rows)
    return "\n".join(out)


def _task_row(task: Task) -> dict[str, str]:
    due = task.due_date.astimezone().strftime("%Y-%m-%d %H:%M:%S") if task.due_date else ""
    return {
        "ID": task.id,
        "Status": task.status.value,
        "Title": task.title,
        "Due": due,
        "Detail": task.description or "",
    }


class TaskManager:
    def __init__(self, storage: Storage, runtime: PluginRuntime | None = None) -> None:
        self._storage = storage
        self._runtime = runtime

    async def execute(self, cmd: Command, parsed_args: ParsedArgs) -> None:
        if isinstance(cmd, CommandPlugin):
            await self._execute_plugin(cmd)
            return

        action = cmd.action.value
        if self._runtime is not None:
            await self._runtime.run_before_execute(action, parsed_args)

        if isinstance(cmd, CommandAdd):
            await self.add_task(cmd)
        elif isinstance(cmd, CommandUpdate):
            await self.update_task(cmd)
        elif isinstance(cmd, CommandDelete):
            await self.delete_task(cmd)
        elif isinstance(cmd, CommandList):
            await self.list_tasks(cmd)
        else:
            raise CommandError(f"Unsupported command action {action}")

        if self._runtime is not None:
            await self._runtime.run_after_execute(action, parsed_args)

    async def _execute_plugin(self, cmd: CommandPlugin) -> None:
        plugin_cmd = self._runtime.get_command(cmd.name) if self._runtime is not None else None
        if plugin_cmd is None:
            raise CommandError(f"Plugin command {cmd.name} not found.")
        logger.debug("Dispatching plugin command %s", cmd.name)
        await maybe_await(plugin_cmd.execute(cmd.raw_args, PluginContext(storage=self._storage)))

    # ---- built-in handlers ----

    async def add_task(self, cmd: CommandAdd) -> None:
        state = await self._storage.load()
        now = utc_now()
        task = Task(
            id=str(state.next_id),
            title=cmd.title,
            status=cmd.status or TaskStatus.TODO,
            created_at=now,
            updated_at=now,
            description=cmd.description or None,
            due_date=cmd.due,
        )
        new_state = State(tasks=[*state.tasks, task], next_id=state.next_id + 1)
        await self.persist(new_state)
        logger.info("Added task id=%s", task.id)

    async def update_task(self, cmd: CommandUpdate) -> None:
        state = await self._storage.load()
        idx = state.find_index(cmd.id)
        if idx < 0:
            print(f"Task ID {cmd.id} not found.", file=sys.stderr)
            return

        task = state.tasks[idx]
        if cmd.title is not None:
            task.title = cmd.title
        if cmd.description is not None:
            task.description = cmd.description
        if cmd.due is not None:
            task.due_date = cmd.due
        if cmd.status is not None:
            task.status = cmd.status
        task.updated_at = utc_now()

        await self.persist(state)
        logger.info("Updated task id=%s", task.id)

    async def delete_task(self, cmd: CommandDelete) -> None:
        state = await self._storage.load()

        if cmd.id == "*":
            state.tasks = []
        else:
            idx = state.find_index(cmd.id)
            if idx < 0:
                print(f"Task ID {cmd.id} not found.", file=sys.stderr)
                return
            del state.tasks[idx]

        await self.persist(state)
        logger.info("Deleted task id=%s", cmd.id)

    async def list_tasks(self, cmd: CommandList) -> None:
        state = await self._storage.load()
        if not state.tasks:
            print("No tasks to list")
            return
        print(format_table([_task_row(t) for t in state.tasks]))

    async def persist(self, state: State) -> None:
        await self._storage.save(state)
