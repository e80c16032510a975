from __future__ import annotations

from dataclasses import dataclass

from ..attendance.repository import AttendanceRepository
from ..core.constants import DEFAULT_LEAVE_BALANCE, WORKING_DAYS_PER_MONTH
from ..tasks.repository import TaskRepository


@dataclass(frozen=True)
class DashboardStats:
    total_hours: float
    tasks_completed: int
    attendance_rate: float
    leave_balance: int


class DashboardService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        tasks: TaskRepository,
        *,
        working_days: int = WORKING_DAYS_PER_MONTH,
        leave_balance: int = DEFAULT_LEAVE_BALANCE,
    ):
        self._attendance = attendance
        self._tasks = tasks
        self._working_days = int(working_days)
        self._leave_balance = int(leave_balance)

    def summary(self, user_id: int) -> DashboardStats:
        records = list(self._attendance.list_for_user(int(user_id)))

        total_hours = round(sum(r.total_hours or 0.0 for r in records), 2)
        rate = round(len(records) / self._working_days * 100, 1) if self._working_days else 0.0

        return DashboardStats(
            total_hours=total_hours,
            tasks_completed=self._tasks.count_completed_for_user(int(user_id)),
            attendance_rate=rate,
            leave_balance=self._leave_balance,
        )
