from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.serialization import iso, parse_date, parse_datetime
from ..core.enums import TaskPriority, TaskStatus


@dataclass(frozen=True)
class TaskRecord:
    """A task assigned to an employee. ``progress`` is independent of ``status``."""

    task_id: int
    title: str
    description: str
    assigned_to: int
    assigned_by: int
    priority: TaskPriority
    status: TaskStatus
    due_date: date
    progress: int = 0
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.status not in (TaskStatus.COMPLETED, TaskStatus.CANCELLED)

    def to_dict(self) -> dict:
        return {
            "task_id": self.task_id,
            "title": self.title,
            "description": self.description,
            "assigned_to": self.assigned_to,
            "assigned_by": self.assigned_by,
            "priority": self.priority.value,
            "status": self.status.value,
            "due_date": iso(self.due_date),
            "progress": self.progress,
            "completed_at": iso(self.completed_at),
            "created_at": iso(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TaskRecord":
        return cls(
            task_id=int(data["task_id"]),
            title=data["title"],
            description=data["description"],
            assigned_to=int(data["assigned_to"]),
            assigned_by=int(data["assigned_by"]),
            priority=TaskPriority(data["priority"]),
            status=TaskStatus(data["status"]),
            due_date=parse_date(data["due_date"]),
            progress=int(data.get("progress", 0)),
            completed_at=parse_datetime(data.get("completed_at")),
            created_at=parse_datetime(data.get("created_at")),
        )


@dataclass(frozen=True)
class TaskComment:
    comment_id: int
    task_id: int
    user_id: int
    comment: str
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "comment_id": self.comment_id,
            "task_id": self.task_id,
            "user_id": self.user_id,
            "comment": self.comment,
            "created_at": iso(self.created_at),
        }


@dataclass(frozen=True)
class TaskStats:
    total: int
    pending: int
    in_progress: int
    completed: int
    overdue: int
    high_priority: int

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "pending": self.pending,
            "in_progress": self.in_progress,
            "completed": self.completed,
            "overdue": self.overdue,
            "high_priority": self.high_priority,
        }
