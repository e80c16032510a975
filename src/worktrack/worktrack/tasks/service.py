from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.datetime_utils import end_of_day, parse_iso_date
from ..common.validators import require_non_empty
from ..core.enums import Role, TaskPriority, TaskStatus
from ..core.exceptions import AuthorizationError, ValidationError
from ..events.channel import ChangeChannel, ChangeEvent, ChangeKind
from ..users.model import EmployeeOption
from ..users.repository import ProfileRepository
from ..users.service import SessionUser
from .model import Task, TaskForm, TaskRow
from .repository import TaskRepository

logger = logging.getLogger(__name__)

TASKS_TABLE = "tasks"

PRIORITY_CSS = {
    TaskPriority.LOW: "bg-success",
    TaskPriority.MEDIUM: "bg-warning text-dark",
    TaskPriority.HIGH: "bg-danger",
}

STATUS_LABELS = {
    TaskStatus.PENDING: "Pending",
    TaskStatus.IN_PROGRESS: "In Progress",
    TaskStatus.COMPLETED: "Completed",
}


def _parse_int(value: str, field_name: str) -> int:
    v = (value or "").strip()
    if not v:
        return 0
    try:
        return int(v)
    except ValueError:
        raise ValidationError(f"{field_name} must be a whole number")


def expected_hours_from(hours: str, minutes: str) -> Optional[float]:
    """Combine the hour/minute inputs into decimal hours; zero means unset."""

    h = _parse_int(hours, "Hours")
    m = _parse_int(minutes, "Minutes")
    if h < 0:
        raise ValidationError("Hours must not be negative")
    if m < 0 or m >= 60:
        raise ValidationError("Minutes must be between 0 and 59")

    total = round(h + m / 60, 2)
    return total if total > 0 else None


def format_expected(expected_hours: Optional[float]) -> str:
    if not expected_hours:
        return "-"
    hours = int(expected_hours)
    minutes = round((expected_hours - hours) * 60)
    return f"{hours}h {minutes}m" if minutes else f"{hours}h"


class TaskService:
    def __init__(self, tasks: TaskRepository, profiles: ProfileRepository, channel: ChangeChannel):
        self._tasks = tasks
        self._profiles = profiles
        self._channel = channel

    def _publish(self, kind: ChangeKind, task_id: int) -> None:
        self._channel.publish(ChangeEvent(table=TASKS_TABLE, kind=kind, row_id=int(task_id)))

    @staticmethod
    def _require_manager(user: SessionUser, action: str) -> None:
        if not user.is_manager:
            raise AuthorizationError(f"Only managers can {action} tasks")

    def list_for(self, current_user: SessionUser) -> Sequence[TaskRow]:
        if current_user.is_manager:
            return self._tasks.list_all_with_profiles()
        return self._tasks.list_for_assignee(current_user.user_id)

    def list_employees(self) -> Sequence[EmployeeOption]:
        return self._profiles.list_by_role(Role.EMPLOYEE)

    def get(self, task_id: int) -> Task:
        task = self._tasks.get_by_id(int(task_id))
        if not task:
            raise ValidationError("Task not found")
        return task

    def upsert(self, *, current_user: SessionUser, form: TaskForm, task_id: Optional[int] = None) -> int:
        self._require_manager(current_user, "create or edit")

        title = require_non_empty(form.title, "Title")
        assignee = (form.user_id or "").strip()
        if not assignee:
            raise ValidationError("Assignee is required")
        try:
            assignee_id = int(assignee)
        except ValueError:
            raise ValidationError("Assignee is invalid")

        if not (form.due_date or "").strip():
            raise ValidationError("Due date is required")
        due_date = end_of_day(parse_iso_date(form.due_date))

        try:
            priority = TaskPriority((form.priority or TaskPriority.MEDIUM.value).strip())
        except ValueError:
            raise ValidationError("Priority is invalid")

        expected = expected_hours_from(form.expected_hours, form.expected_minutes)
        description = (form.description or "").strip()

        if task_id is None:
            new_id = self._tasks.create(
                title=title,
                description=description,
                due_date=due_date,
                priority=priority,
                user_id=assignee_id,
                created_by=current_user.user_id,
                expected_hours=expected,
            )
            logger.info("Task %s created by %s for user %s", new_id, current_user.user_id, assignee_id)
            self._publish(ChangeKind.INSERT, new_id)
            return new_id

        self.get(task_id)
        self._tasks.update(
            task_id=int(task_id),
            title=title,
            description=description,
            due_date=due_date,
            priority=priority,
            user_id=assignee_id,
            expected_hours=expected,
        )
        logger.info("Task %s updated by %s", task_id, current_user.user_id)
        self._publish(ChangeKind.UPDATE, task_id)
        return int(task_id)

    def set_status(self, *, current_user: SessionUser, task_id: int, status: TaskStatus) -> None:
        task = self.get(task_id)
        if not current_user.is_manager and task.user_id != current_user.user_id:
            raise AuthorizationError("You can only update your own tasks")

        self._tasks.update_status(task_id=task.id, status=status)
        logger.info("Task %s set to %s by %s", task.id, status.value, current_user.user_id)
        self._publish(ChangeKind.UPDATE, task.id)

    def delete(self, *, current_user: SessionUser, task_id: int, confirmed: bool) -> bool:
        """Delete after explicit confirmation; returns False when not confirmed."""

        self._require_manager(current_user, "delete")
        if not confirmed:
            return False

        if not self._tasks.delete(int(task_id)):
            raise ValidationError("Task not found")
        logger.info("Task %s deleted by %s", task_id, current_user.user_id)
        self._publish(ChangeKind.DELETE, task_id)
        return True

    def to_ui(self, row: TaskRow) -> dict:
        t = row.task
        return {
            "id": t.id,
            "title": t.title,
            "description": t.description,
            "due_date": t.due_date.strftime("%b %d, %Y"),
            "priority": t.priority.value,
            "priority_css": PRIORITY_CSS[t.priority],
            "status": t.status.value,
            "status_label": STATUS_LABELS[t.status],
            "expected": format_expected(t.expected_hours),
            "user_id": t.user_id,
            "assignee_name": row.assignee_name,
            "assignee_email": row.assignee_email,
        }
