from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import TaskPriority, TaskStatus


@dataclass(frozen=True)
class Task:
    id: int
    title: str
    description: str
    due_date: datetime
    priority: TaskPriority
    status: TaskStatus
    user_id: int
    created_by: Optional[int] = None
    expected_hours: Optional[float] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class TaskRow:
    """Task joined with the assignee's profile, for the board table."""

    task: Task
    assignee_name: str
    assignee_email: str


@dataclass(frozen=True)
class TaskForm:
    """Raw values posted by the create/edit form."""

    title: str
    description: str
    due_date: str
    priority: str
    user_id: str
    expected_hours: str = "0"
    expected_minutes: str = "0"

    @classmethod
    def from_task(cls, task: Task) -> "TaskForm":
        total = task.expected_hours or 0.0
        hours = int(total)
        return cls(
            title=task.title,
            description=task.description,
            due_date=task.due_date.strftime("%Y-%m-%d"),
            priority=task.priority.value,
            user_id=str(task.user_id),
            expected_hours=str(hours),
            expected_minutes=str(round((total - hours) * 60)),
        )
