from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_for_user(self, user_id: int) -> Sequence[AttendanceRecord]:
        """All records of the user, newest first."""

        raise NotImplementedError

    def get_open_for_user(self, user_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(self, *, user_id: int, check_in: datetime, status: AttendanceStatus) -> int:
        """Insert an open record.

        Raises ValidationError when the user already has an open record.
        """

        raise NotImplementedError

    def close_record(self, *, attendance_id: int, check_out: datetime, total_hours: float) -> bool:
        """Write check-out and total hours in one update; False if already closed."""

        raise NotImplementedError
