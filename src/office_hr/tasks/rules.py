from __future__ import annotations

from datetime import date
from typing import Iterable

from ..core.enums import TaskPriority, TaskStatus
from ..core.exceptions import InvalidStateTransitionError
from .model import TaskRecord, TaskStats

_ALLOWED = {
    TaskStatus.PENDING: {TaskStatus.IN_PROGRESS, TaskStatus.CANCELLED},
    TaskStatus.IN_PROGRESS: {TaskStatus.COMPLETED, TaskStatus.CANCELLED},
    TaskStatus.COMPLETED: set(),
    TaskStatus.CANCELLED: set(),
}


def ensure_transition(current: TaskStatus, target: TaskStatus) -> None:
    if target not in _ALLOWED[current]:
        raise InvalidStateTransitionError(f"Cannot move task from {current.value} to {target.value}")


def compute_stats(tasks: Iterable[TaskRecord], *, today: date) -> TaskStats:
    tasks = list(tasks)
    return TaskStats(
        total=len(tasks),
        pending=sum(1 for t in tasks if t.status == TaskStatus.PENDING),
        in_progress=sum(1 for t in tasks if t.status == TaskStatus.IN_PROGRESS),
        completed=sum(1 for t in tasks if t.status == TaskStatus.COMPLETED),
        overdue=sum(1 for t in tasks if t.is_open and t.due_date < today),
        high_priority=sum(
            1 for t in tasks if t.is_open and t.priority in (TaskPriority.HIGH, TaskPriority.URGENT)
        ),
    )
