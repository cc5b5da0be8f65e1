from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import parse_enum, require_non_empty, require_percentage
from ..core.enums import TaskPriority, TaskStatus
from ..core.exceptions import AuthorizationError, InvalidStateTransitionError, NotFoundError
from ..core.identity import Actor
from .model import TaskComment, TaskRecord, TaskStats
from .repository import TaskRepository
from .rules import compute_stats, ensure_transition

logger = logging.getLogger(__name__)


class TaskService:
    """Use case: assign tasks, track their status/progress and discuss them."""

    def __init__(self, tasks: TaskRepository):
        self._tasks = tasks

    def _get_visible(self, actor: Actor, task_id: int) -> TaskRecord:
        task = self._tasks.get_by_id(int(task_id))
        if not task:
            raise NotFoundError("Task not found")
        if not actor.is_admin and actor.user_id not in (task.assigned_to, task.assigned_by):
            raise AuthorizationError("You are not involved in this task")
        return task

    def create(
        self,
        actor: Actor,
        *,
        title: str,
        description: str,
        assigned_to: int,
        due_date: date,
        priority: TaskPriority | str = TaskPriority.MEDIUM,
    ) -> TaskRecord:
        actor.require_admin("Only admins can assign tasks")
        task = self._tasks.insert_task(
            title=require_non_empty(title, "Title"),
            description=(description or "").strip(),
            assigned_to=int(assigned_to),
            assigned_by=actor.user_id,
            priority=parse_enum(TaskPriority, priority, "Priority"),
            due_date=due_date,
        )
        logger.info("Task %s assigned to %s by %s", task.task_id, task.assigned_to, actor.user_id)
        return task

    def get(self, actor: Actor, *, task_id: int) -> TaskRecord:
        return self._get_visible(actor, task_id)

    def update(
        self,
        actor: Actor,
        *,
        task_id: int,
        title: Optional[str] = None,
        description: Optional[str] = None,
        assigned_to: Optional[int] = None,
        priority: Optional[TaskPriority | str] = None,
        due_date: Optional[date] = None,
    ) -> TaskRecord:
        """Edit task details; ``None`` keeps the stored value. Admins or the assigner only."""

        task = self._get_visible(actor, task_id)
        if not actor.is_admin and actor.user_id != task.assigned_by:
            raise AuthorizationError("Only the assigner can edit this task")

        self._tasks.update_task(
            task.task_id,
            title=require_non_empty(title, "Title") if title is not None else task.title,
            description=description.strip() if description is not None else task.description,
            assigned_to=int(assigned_to) if assigned_to is not None else task.assigned_to,
            priority=parse_enum(TaskPriority, priority, "Priority") if priority is not None else task.priority,
            due_date=due_date or task.due_date,
        )
        return self._get_visible(actor, task.task_id)

    def delete(self, actor: Actor, *, task_id: int) -> None:
        actor.require_admin("Only admins can delete tasks")
        task = self._get_visible(actor, task_id)
        self._tasks.deactivate(task.task_id)
        logger.info("Task %s deleted by %s", task.task_id, actor.user_id)

    def update_status(self, actor: Actor, *, task_id: int, status: TaskStatus | str) -> TaskRecord:
        task = self._get_visible(actor, task_id)
        target = parse_enum(TaskStatus, status, "Status")
        ensure_transition(task.status, target)

        completed_at = now_local() if target == TaskStatus.COMPLETED else None
        if not self._tasks.update_status(
            task_id=task.task_id,
            current=task.status,
            status=target,
            completed_at=completed_at,
        ):
            raise InvalidStateTransitionError("Task status changed concurrently")
        return self._get_visible(actor, task.task_id)

    def update_progress(self, actor: Actor, *, task_id: int, progress: int) -> TaskRecord:
        task = self._get_visible(actor, task_id)
        progress = require_percentage(progress, "Progress")
        self._tasks.update_progress(task_id=task.task_id, progress=progress)
        return self._get_visible(actor, task.task_id)

    def add_comment(self, actor: Actor, *, task_id: int, comment: str) -> TaskComment:
        task = self._get_visible(actor, task_id)
        return self._tasks.add_comment(
            task_id=task.task_id,
            user_id=actor.user_id,
            comment=require_non_empty(comment, "Comment"),
        )

    def list_comments(self, actor: Actor, *, task_id: int) -> Sequence[TaskComment]:
        task = self._get_visible(actor, task_id)
        return self._tasks.list_comments(task.task_id)

    def list_tasks(self, actor: Actor) -> Sequence[TaskRecord]:
        return self._tasks.list_tasks(user_id=None if actor.is_admin else actor.user_id)

    def stats(self, actor: Actor, *, today: Optional[date] = None) -> TaskStats:
        today = today or now_local().date()
        return compute_stats(self.list_tasks(actor), today=today)
