from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import TaskPriority, TaskStatus
from .model import Task, TaskRow


class TaskRepository(Protocol):
    def list_all_with_profiles(self) -> Sequence[TaskRow]:
        raise NotImplementedError

    def list_for_assignee(self, user_id: int) -> Sequence[TaskRow]:
        raise NotImplementedError

    def get_by_id(self, task_id: int) -> Optional[Task]:
        raise NotImplementedError

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
        """Insert a PENDING task and return its id."""

        raise NotImplementedError

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
        raise NotImplementedError

    def update_status(self, *, task_id: int, status: TaskStatus) -> bool:
        raise NotImplementedError

    def delete(self, task_id: int) -> bool:
        raise NotImplementedError

    def count_completed_for_user(self, user_id: int) -> int:
        raise NotImplementedError
