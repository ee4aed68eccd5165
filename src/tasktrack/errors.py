# src/tasktrack/errors.py

"""Exception hierarchy shared by the CLI, storage and plugin runtime."""

from __future__ import annotations


class TaskTrackError(Exception):
    """Base class for errors reported to the user by the CLI entrypoint."""


class CommandError(TaskTrackError):
    """Unknown/missing command action, or a plugin command that cannot be resolved."""


class StorageError(TaskTrackError):
    """The persisted document exists but cannot be decoded."""


class PluginLoadError(TaskTrackError):
    """A plugin candidate could not be imported or normalized."""

    def __init__(self, path: object, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path
