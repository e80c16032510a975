from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local, parse_local_datetime
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_LEAVE_HOURS, MAX_LEAVE_HOURS_PER_DAY
from ..core.enums import LeaveType, RequestStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import LeaveForm, LeaveRequest, LeaveRequestRow
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60

TYPE_LABELS = {
    LeaveType.FULL_DAY: "Full Day",
    LeaveType.HOURLY: "Hourly",
    LeaveType.ONE_DAY: "One Day",
}

STATUS_CSS = {
    RequestStatus.PENDING: "bg-warning text-dark",
    RequestStatus.APPROVED: "bg-success",
    RequestStatus.REJECTED: "bg-danger",
}


def day_span(leave_type: LeaveType, start: Optional[datetime], end: Optional[datetime]) -> Optional[int]:
    """Number of calendar days covered, both endpoints included.

    ONE_DAY is always 1. Other types need both dates; a partial day
    counts as a whole one.
    """
    if leave_type == LeaveType.ONE_DAY:
        return 1
    if start is None or end is None:
        return None
    diff_days = abs((end - start).total_seconds()) / SECONDS_PER_DAY
    return math.ceil(diff_days) + 1


class LeaveService:
    def __init__(self, requests: LeaveRepository):
        self._requests = requests

    @staticmethod
    def _parse_type(value: str) -> LeaveType:
        try:
            return LeaveType((value or "").strip())
        except ValueError:
            raise ValidationError("Leave type is invalid")

    @staticmethod
    def _parse_hours(leave_type: LeaveType, value: str) -> float:
        if leave_type == LeaveType.FULL_DAY:
            return float(DEFAULT_LEAVE_HOURS)

        v = (value or "").strip()
        if not v:
            return float(DEFAULT_LEAVE_HOURS)
        try:
            hours = float(v)
        except ValueError:
            raise ValidationError("Hours must be a number")
        if not math.isfinite(hours) or hours <= 0 or hours > MAX_LEAVE_HOURS_PER_DAY:
            raise ValidationError(f"Hours must be between 0 and {MAX_LEAVE_HOURS_PER_DAY}")
        return hours

    def submit(self, *, user_id: int, form: LeaveForm, now: Optional[datetime] = None) -> int:
        now = now or now_local()
        leave_type = self._parse_type(form.type)

        start_date = parse_local_datetime(form.start_date)
        if start_date is None:
            raise ValidationError("Start date is required")
        if start_date.date() < now.date():
            raise ValidationError("Start date cannot be in the past")

        if leave_type == LeaveType.ONE_DAY:
            end_date = None
        else:
            end_date = parse_local_datetime(form.end_date)
            if end_date is None:
                raise ValidationError("End date is required")
            if end_date < start_date:
                raise ValidationError("End date must not be before start date")

        hours = self._parse_hours(leave_type, form.hours)
        reason = require_non_empty(form.reason, "Reason")

        request_id = self._requests.create(
            user_id=int(user_id),
            type=leave_type,
            start_date=start_date,
            end_date=end_date,
            hours=hours,
            reason=reason,
        )
        logger.info("User %s submitted leave request %s (%s)", user_id, request_id, leave_type.value)
        return request_id

    def list_mine(self, user_id: int) -> Sequence[LeaveRequest]:
        return self._requests.list_for_user(int(user_id))

    def list_all(self, *, current_role: Role) -> Sequence[LeaveRequestRow]:
        if current_role != Role.MANAGER:
            raise AuthorizationError("Only managers can access this page")
        return self._requests.list_all_with_profiles()

    def set_status(
        self,
        *,
        current_role: Role,
        request_id: int,
        new_status: RequestStatus,
        rejection_reason: Optional[str] = None,
    ) -> None:
        if current_role != Role.MANAGER:
            raise AuthorizationError("Only managers can review leave requests")

        if new_status == RequestStatus.APPROVED:
            reason = None
        elif new_status == RequestStatus.REJECTED:
            reason = require_non_empty(rejection_reason or "", "Rejection reason")
        else:
            raise ValidationError("A request can only be approved or rejected")

        if not self._requests.decide(request_id=int(request_id), status=new_status, rejection_reason=reason):
            raise ValidationError("Request not found or already processed")
        logger.info("Leave request %s %s", request_id, new_status.value.lower())

    def approve(self, *, current_role: Role, request_id: int) -> None:
        self.set_status(current_role=current_role, request_id=request_id, new_status=RequestStatus.APPROVED)

    def reject(self, *, current_role: Role, request_id: int, rejection_reason: str) -> None:
        self.set_status(
            current_role=current_role,
            request_id=request_id,
            new_status=RequestStatus.REJECTED,
            rejection_reason=rejection_reason,
        )

    def to_ui(self, r: LeaveRequest) -> dict:
        return {
            "id": r.id,
            "type": TYPE_LABELS[r.type],
            "start_date": r.start_date.strftime("%b %d, %Y %H:%M"),
            "end_date": r.end_date.strftime("%b %d, %Y %H:%M") if r.end_date else "-",
            "total_days": day_span(r.type, r.start_date, r.end_date or r.start_date),
            "hours": f"{r.hours:g}",
            "reason": r.reason,
            "status": r.status.value,
            "css_class": STATUS_CSS[r.status],
            "is_pending": r.is_pending,
            "rejection_reason": r.rejection_reason or "",
        }
