# src/tasktrack/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing read at import time beyond .env; settings are built on first use.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKTRACK"

BUILTIN_PLUGINS_DIR = Path(__file__).resolve().parent / "plugins" / "builtin"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


# A local .env never overrides variables already set in the environment.
load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path | None) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_file: Path | None

    # ---- Storage ----
    data_file: Path

    # ---- Plugins ----
    plugins_dir: Path | None
    builtin_plugins: bool

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            app_name=_env(_k("APP_NAME"), "tasktrack") or "tasktrack",
            log_level=_env(_k("LOG_LEVEL"), "WARNING"),
            log_file=_env_path(_k("LOG_FILE"), None),
            data_file=_env_path(_k("DATA_FILE"), Path("tasks.json")) or Path("tasks.json"),
            plugins_dir=_env_path(_k("PLUGINS_DIR"), None),
            builtin_plugins=_env_bool(_k("BUILTIN_PLUGINS"), True),
        )

    def plugin_dirs(self) -> list[Path]:
        """Directories to scan, in load order: shipped plugins first, then the user's."""
        dirs: list[Path] = []
        if self.builtin_plugins:
            dirs.append(BUILTIN_PLUGINS_DIR)
        if self.plugins_dir is not None:
            dirs.append(self.plugins_dir)
        return dirs


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
