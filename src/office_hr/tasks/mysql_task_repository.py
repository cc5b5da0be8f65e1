from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import TaskPriority, TaskStatus
from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import TaskComment, TaskRecord
from .repository import TaskRepository

_COLUMNS = """
    task_id, title, description, assigned_to, assigned_by, priority, status,
    due_date, progress, completed_at, created_at
"""


def _to_task(r: dict) -> TaskRecord:
    return TaskRecord(
        task_id=int(r["task_id"]),
        title=r["title"],
        description=r["description"],
        assigned_to=int(r["assigned_to"]),
        assigned_by=int(r["assigned_by"]),
        priority=TaskPriority(r["priority"]),
        status=TaskStatus(r["status"]),
        due_date=r["due_date"],
        progress=int(r["progress"]),
        completed_at=r.get("completed_at"),
        created_at=r.get("created_at"),
    )


def _to_comment(r: dict) -> TaskComment:
    return TaskComment(
        comment_id=int(r["comment_id"]),
        task_id=int(r["task_id"]),
        user_id=int(r["user_id"]),
        comment=r["comment"],
        created_at=r["created_at"],
    )


class MySQLTaskRepository(TaskRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO tasks(title, description, assigned_to, assigned_by, priority, due_date)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (title, description, int(assigned_to), int(assigned_by), priority.value, due_date),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM tasks WHERE task_id=%s", (int(cur.lastrowid),))
            r = fetchone(cur)
        if not r:
            raise NotFoundError("Task not found after insert")
        return _to_task(r)

    def get_by_id(self, task_id: int) -> Optional[TaskRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM tasks WHERE task_id=%s AND is_active=1", (int(task_id),))
            r = fetchone(cur)
            return _to_task(r) if r else None

    def update_status(
        self,
        *,
        task_id: int,
        current: TaskStatus,
        status: TaskStatus,
        completed_at: Optional[datetime] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE tasks SET status=%s, completed_at=%s WHERE task_id=%s AND status=%s",
                (status.value, completed_at, int(task_id), current.value),
            )
            return cur.rowcount > 0

    def update_progress(self, *, task_id: int, progress: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE tasks SET progress=%s WHERE task_id=%s", (int(progress), int(task_id)))
            return cur.rowcount > 0

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE tasks
                SET title=%s, description=%s, assigned_to=%s, priority=%s, due_date=%s
                WHERE task_id=%s AND is_active=1
                """,
                (title, description, int(assigned_to), priority.value, due_date, int(task_id)),
            )
            return cur.rowcount > 0

    def deactivate(self, task_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE tasks SET is_active=0 WHERE task_id=%s AND is_active=1", (int(task_id),))
            return cur.rowcount > 0

    def add_comment(self, *, task_id: int, user_id: int, comment: str) -> TaskComment:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO task_comments(task_id, user_id, comment) VALUES(%s,%s,%s)",
                (int(task_id), int(user_id), comment),
            )
            cur.execute(
                "SELECT comment_id, task_id, user_id, comment, created_at FROM task_comments WHERE comment_id=%s",
                (int(cur.lastrowid),),
            )
            r = fetchone(cur)
        if not r:
            raise NotFoundError("Comment not found after insert")
        return _to_comment(r)

    def list_comments(self, task_id: int) -> Sequence[TaskComment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT comment_id, task_id, user_id, comment, created_at
                FROM task_comments
                WHERE task_id=%s
                ORDER BY created_at ASC
                """,
                (int(task_id),),
            )
            return [_to_comment(r) for r in fetchall(cur)]

    def list_tasks(self, *, user_id: Optional[int] = None) -> Sequence[TaskRecord]:
        clause = "is_active=1"
        params: tuple = ()
        if user_id is not None:
            clause += " AND (assigned_to=%s OR assigned_by=%s)"
            params = (int(user_id), int(user_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM tasks WHERE {clause} ORDER BY due_date ASC", params)
            return [_to_task(r) for r in fetchall(cur)]
