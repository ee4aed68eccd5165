# tests/conftest.py

from __future__ import annotations

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from tasktrack.cli.bootstrap import create_runtime
from tasktrack.config import Settings
from tasktrack.plugins.runtime import PluginRuntime
from tasktrack.tasks.task_store import FileStorage

from .fakes import MemoryStorage


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """
    Settings pointing at a tmp data file and tmp plugin dir.

    Built directly instead of Settings.from_env() so a developer's .env/env vars
    cannot leak into tests.
    """
    plugins_dir = tmp_path / "plugins"
    plugins_dir.mkdir()
    return Settings(
        app_name="tasktrack",
        log_level="WARNING",
        log_file=None,
        data_file=tmp_path / "tasks.json",
        plugins_dir=plugins_dir,
        builtin_plugins=False,
    )


@pytest.fixture()
def file_storage(settings: Settings) -> FileStorage:
    return FileStorage(settings.data_file)


@pytest.fixture()
def memory_storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture()
def runtime(memory_storage: MemoryStorage) -> PluginRuntime:
    return create_runtime(memory_storage)


@pytest.fixture()
def write_plugin(settings: Settings) -> Callable[[str, str], Path]:
    """Write a plugin source file into the tmp plugin dir and return its path."""

    def _write(filename: str, source: str) -> Path:
        path = settings.plugins_dir / filename
        path.write_text(textwrap.dedent(source), "utf-8")
        return path

    return _write
