# tests/test_main.py

from __future__ import annotations

import dataclasses
import json

import pytest

from tasktrack.cli import main as cli_main


@pytest.fixture()
def run_cli(settings, monkeypatch):
    """Call main() against tmp settings, without touching global logging handlers."""

    def _run(*argv: str, **overrides) -> int:
        effective = dataclasses.replace(settings, **overrides)
        monkeypatch.setattr(cli_main, "get_settings", lambda: effective)
        monkeypatch.setattr(cli_main, "setup_logging", lambda **_: None)
        return cli_main.main(list(argv))

    return _run


def _stored(settings) -> dict:
    return json.loads(settings.data_file.read_text("utf-8"))


def test_add_then_list(run_cli, settings, capsys) -> None:
    assert run_cli("add", "Buy milk", "--due", "2025-01-10") == 0
    data = _stored(settings)
    assert data["nextId"] == 2
    assert data["tasks"][0]["id"] == "1"
    assert data["tasks"][0]["status"] == "todo"
    assert data["tasks"][0]["dueDate"] == "2025-01-10T00:00:00.000Z"

    assert run_cli("ls") == 0
    assert "Buy milk" in capsys.readouterr().out


def test_update_unknown_id_exits_zero(run_cli, settings, capsys) -> None:
    assert run_cli("up", "7", "--status", "done") == 0
    assert not settings.data_file.exists()
    assert "Task ID 7 not found." in capsys.readouterr().err


def test_unknown_and_missing_command_exit_one(run_cli, capsys) -> None:
    assert run_cli("nope") == 1
    captured = capsys.readouterr()
    assert "Available commands:" in captured.out
    assert "Error: Unknown command action nope" in captured.err

    assert run_cli() == 1
    assert "Error: Missing command action" in capsys.readouterr().err


def test_missing_title_hard_exits(run_cli, capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        run_cli("add")
    assert exc.value.code == 1
    assert "Usage:" in capsys.readouterr().out


def test_storage_read_failure_exits_one(run_cli, settings, capsys) -> None:
    settings.data_file.mkdir()
    assert run_cli("ls") == 1
    assert "Error:" in capsys.readouterr().err


def test_user_plugin_hooks_and_shutdown(run_cli, settings, write_plugin, capsys) -> None:
    write_plugin(
        "announce.py",
        """
        async def _after_add(args, ctx):
            state = await ctx.storage.load()
            print(f"now tracking {len(state.tasks)} task(s)")

        def _shutdown():
            print("announce: bye")

        plugin = {
            "name": "announce",
            "version": "1.0.0",
            "extensions": [{"command": "add", "afterExecution": _after_add}],
            "shutdown": _shutdown,
        }
        """,
    )
    assert run_cli("add", "Ship it") == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["now tracking 1 task(s)", "announce: bye"]


def test_hook_failure_exits_one_and_still_shuts_down(run_cli, settings, write_plugin, capsys) -> None:
    write_plugin(
        "guard.py",
        """
        def _no_deletes(args, ctx):
            raise RuntimeError("deletes are disabled")

        name = "guard"
        version = "1.0.0"
        extensions = [{"command": "delete", "beforeExecution": _no_deletes}]

        def shutdown():
            print("guard down")
        """,
    )
    assert run_cli("rm", "*") == 1
    captured = capsys.readouterr()
    assert "Error: deletes are disabled" in captured.err
    assert "guard down" in captured.out


def test_builtin_stats_and_export(run_cli, capsys) -> None:
    assert run_cli("stats", builtin_plugins=True) == 0
    assert capsys.readouterr().out.strip() == "No tasks found."

    run_cli("add", "a", builtin_plugins=True)
    run_cli("add", "b", "--status", "done", builtin_plugins=True)
    run_cli("add", "c", builtin_plugins=True)
    capsys.readouterr()

    assert run_cli("stats", builtin_plugins=True) == 0
    assert capsys.readouterr().out.splitlines() == ["Total tasks: 3", "  todo: 2", "  done: 1"]

    assert run_cli("export-json", builtin_plugins=True) == 0
    exported = json.loads(capsys.readouterr().out)
    assert [t["title"] for t in exported] == ["a", "b", "c"]
    assert exported[1]["status"] == "done"


def test_builtin_plugin_usages_appear_in_help(run_cli, capsys) -> None:
    assert run_cli("help", builtin_plugins=True) == 1
    out = capsys.readouterr().out
    assert "  export-json" in out
    assert "  stats" in out
