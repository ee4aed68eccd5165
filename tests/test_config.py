# tests/test_config.py

from __future__ import annotations

from pathlib import Path

from tasktrack.config import BUILTIN_PLUGINS_DIR, Settings


def test_defaults(monkeypatch) -> None:
    for var in ("APP_NAME", "LOG_LEVEL", "LOG_FILE", "DATA_FILE", "PLUGINS_DIR", "BUILTIN_PLUGINS"):
        monkeypatch.delenv(f"TASKTRACK_{var}", raising=False)

    s = Settings.from_env()
    assert s.app_name == "tasktrack"
    assert s.data_file == Path("tasks.json")
    assert s.plugins_dir is None
    assert s.log_file is None
    assert s.plugin_dirs() == [BUILTIN_PLUGINS_DIR]


def test_env_overrides(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKTRACK_DATA_FILE", str(tmp_path / "t.json"))
    monkeypatch.setenv("TASKTRACK_PLUGINS_DIR", str(tmp_path / "plugins"))
    monkeypatch.setenv("TASKTRACK_BUILTIN_PLUGINS", "off")
    monkeypatch.setenv("TASKTRACK_LOG_LEVEL", "debug")

    s = Settings.from_env()
    assert s.data_file == tmp_path / "t.json"
    assert s.log_level == "debug"
    assert s.plugin_dirs() == [tmp_path / "plugins"]


def test_builtin_plugins_dir_ships_plugins() -> None:
    names = {p.name for p in BUILTIN_PLUGINS_DIR.glob("*.py")}
    assert {"stats.py", "export.py"} <= names
