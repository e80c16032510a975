from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import LeaveType, RequestStatus


@dataclass(frozen=True)
class LeaveRequest:
    id: int
    user_id: int
    type: LeaveType
    start_date: datetime
    end_date: Optional[datetime]
    hours: float
    reason: str
    status: RequestStatus
    created_at: datetime
    rejection_reason: Optional[str] = None

    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING


@dataclass(frozen=True)
class LeaveRequestRow:
    """Read-model for the manager list (joined with the owner's profile)."""

    request: LeaveRequest
    full_name: str
    email: str


@dataclass(frozen=True)
class LeaveForm:
    """Raw submission values, as posted by the leave form."""

    type: str
    start_date: str
    end_date: str
    hours: str
    reason: str
