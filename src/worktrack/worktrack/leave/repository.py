from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveType, RequestStatus
from .model import LeaveRequest, LeaveRequestRow


class LeaveRepository(Protocol):
    def create(
        self,
        *,
        user_id: int,
        type: LeaveType,
        start_date: datetime,
        end_date: Optional[datetime],
        hours: float,
        reason: str,
    ) -> int:
        """Insert a PENDING request and return its id."""

        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def list_all_with_profiles(self) -> Sequence[LeaveRequestRow]:
        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        rejection_reason: Optional[str] = None,
    ) -> bool:
        """Move a PENDING request to a terminal status.

        Returns False when the request does not exist or is no longer pending.
        """

        raise NotImplementedError
