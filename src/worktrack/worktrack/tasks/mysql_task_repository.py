from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import TaskPriority, TaskStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_float
from .model import Task, TaskRow
from .repository import TaskRepository

_SELECT_ROWS = """
    SELECT t.id, t.title, t.description, t.due_date, t.priority, t.status,
           t.user_id, t.created_by, t.expected_hours, t.created_at,
           p.full_name, p.email
    FROM tasks t
    JOIN profiles p ON p.id = t.user_id
"""


def _to_task(r: dict) -> Task:
    return Task(
        id=int(r["id"]),
        title=r["title"],
        description=r.get("description") or "",
        due_date=r["due_date"],
        priority=TaskPriority(r["priority"]),
        status=TaskStatus(r["status"]),
        user_id=int(r["user_id"]),
        created_by=int(r["created_by"]) if r.get("created_by") is not None else None,
        expected_hours=to_float(r.get("expected_hours")),
        created_at=r.get("created_at"),
    )


def _to_row(r: dict) -> TaskRow:
    return TaskRow(task=_to_task(r), assignee_name=r["full_name"], assignee_email=r["email"])


class MySQLTaskRepository(TaskRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all_with_profiles(self) -> Sequence[TaskRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_ROWS + " ORDER BY t.created_at DESC, t.id DESC")
            return [_to_row(r) for r in fetchall(cur)]

    def list_for_assignee(self, user_id: int) -> Sequence[TaskRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_ROWS + " WHERE t.user_id=%s ORDER BY t.created_at DESC, t.id DESC", (int(user_id),))
            return [_to_row(r) for r in fetchall(cur)]

    def get_by_id(self, task_id: int) -> Optional[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, title, description, due_date, priority, status,
                       user_id, created_by, expected_hours, created_at
                FROM tasks WHERE id=%s
                """,
                (int(task_id),),
            )
            r = fetchone(cur)
            return _to_task(r) if r else None

    def create(
        self,
        *,
        title: str,
        description: str,
        due_date: datetime,
        priority: TaskPriority,
        user_id: int,
        created_by: int,
        expected_hours: Optional[float],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO tasks(title, description, due_date, priority, status, user_id, created_by, expected_hours)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    title,
                    description,
                    due_date,
                    priority.value,
                    TaskStatus.PENDING.value,
                    int(user_id),
                    int(created_by),
                    expected_hours,
                ),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        task_id: int,
        title: str,
        description: str,
        due_date: datetime,
        priority: TaskPriority,
        user_id: int,
        expected_hours: Optional[float],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE tasks
                SET title=%s, description=%s, due_date=%s, priority=%s, user_id=%s,
                    expected_hours=%s, updated_at=NOW()
                WHERE id=%s
                """,
                (title, description, due_date, priority.value, int(user_id), expected_hours, int(task_id)),
            )
            return cur.rowcount > 0

    def update_status(self, *, task_id: int, status: TaskStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE tasks SET status=%s, updated_at=NOW() WHERE id=%s",
                (status.value, int(task_id)),
            )
            return cur.rowcount > 0

    def delete(self, task_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM tasks WHERE id=%s", (int(task_id),))
            return cur.rowcount > 0

    def count_completed_for_user(self, user_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS n FROM tasks WHERE user_id=%s AND status=%s",
                (int(user_id), TaskStatus.COMPLETED.value),
            )
            r = fetchone(cur)
            return int(r["n"]) if r else 0
