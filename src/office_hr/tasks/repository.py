from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import TaskPriority, TaskStatus
from .model import TaskComment, TaskRecord


class TaskRepository(Protocol):
    def insert_task(
        self,
        *,
        title: str,
        description: str,
        assigned_to: int,
        assigned_by: int,
        priority: TaskPriority,
        due_date: date,
    ) -> TaskRecord:
        raise NotImplementedError

    def get_by_id(self, task_id: int) -> Optional[TaskRecord]:
        raise NotImplementedError

    def update_status(
        self,
        *,
        task_id: int,
        current: TaskStatus,
        status: TaskStatus,
        completed_at: Optional[datetime] = None,
    ) -> bool:
        """Apply only while the stored status still equals ``current``."""

        raise NotImplementedError

    def update_progress(self, *, task_id: int, progress: int) -> bool:
        raise NotImplementedError

    def add_comment(self, *, task_id: int, user_id: int, comment: str) -> TaskComment:
        raise NotImplementedError

    def list_comments(self, task_id: int) -> Sequence[TaskComment]:
        raise NotImplementedError

    def update_task(
        self,
        task_id: int,
        *,
        title: str,
        description: str,
        assigned_to: int,
        priority: TaskPriority,
        due_date: date,
    ) -> bool:
        raise NotImplementedError

    def deactivate(self, task_id: int) -> bool:
        """Soft delete: the task disappears from reads but keeps its comments."""

        raise NotImplementedError

    def list_tasks(self, *, user_id: Optional[int] = None) -> Sequence[TaskRecord]:
        """Active tasks; with ``user_id`` only those assigned to or by that user."""

        raise NotImplementedError
