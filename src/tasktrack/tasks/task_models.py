# src/tasktrack/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any


class TaskStatus(StrEnum):
    """Task lifecycle status (values are the on-disk spelling)."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    @classmethod
    def parse(cls, raw: str | None) -> TaskStatus | None:
        if not raw:
            return None
        try:
            return cls(raw)
        except ValueError:
            return None


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(dt: datetime) -> str:
    """Serialize as ISO 8601 UTC with millisecond precision and a trailing 'Z'."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    text = dt.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def from_iso(raw: str) -> datetime:
    dt = datetime.fromisoformat(raw)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def parse_due_date(raw: str) -> datetime | None:
    """
    Parse a CLI due date.

    Date-only input (YYYY-MM-DD) means midnight UTC. Full ISO timestamps are accepted too.
    Returns None when the value cannot be parsed.
    """
    raw = (raw or "").strip()
    if not raw:
        return None
    try:
        return from_iso(raw)
    except ValueError:
        return None


@dataclass(slots=True)
class Task:
    id: str
    title: str
    status: TaskStatus
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    due_date: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "status": self.status.value,
            "createdAt": to_iso(self.created_at),
            "updatedAt": to_iso(self.updated_at),
        }
        if self.description is not None:
            out["description"] = self.description
        if self.due_date is not None:
            out["dueDate"] = to_iso(self.due_date)
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        status = TaskStatus.parse(data.get("status")) or TaskStatus.TODO
        due_raw = data.get("dueDate")
        return cls(
            id=str(data["id"]),
            title=str(data.get("title", "")),
            status=status,
            created_at=from_iso(data["createdAt"]),
            updated_at=from_iso(data["updatedAt"]),
            description=data.get("description"),
            due_date=from_iso(due_raw) if due_raw else None,
        )


@dataclass(slots=True)
class State:
    """The single persisted document: all tasks plus the next-id counter."""

    tasks: list[Task] = field(default_factory=list)
    next_id: int = 1

    def to_dict(self) -> dict[str, Any]:
        return {"tasks": [t.to_dict() for t in self.tasks], "nextId": self.next_id}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> State:
        tasks = [Task.from_dict(t) for t in data.get("tasks") or []]
        return cls(tasks=tasks, next_id=int(data.get("nextId", 1)))

    def find_index(self, task_id: str) -> int:
        for i, task in enumerate(self.tasks):
            if task.id == task_id:
                return i
        return -1
