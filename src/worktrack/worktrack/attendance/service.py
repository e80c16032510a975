from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from .factory import AttendanceStrategyFactory
from .hours import HoursCalculator, WallClockHoursCalculator
from .model import AttendanceRecord, AttendanceState
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

STATUS_LABELS = {
    AttendanceStatus.PRESENT: "Present",
    AttendanceStatus.LATE: "Late",
    AttendanceStatus.ABSENT: "Absent",
}

STATUS_CSS = {
    AttendanceStatus.PRESENT: "bg-success",
    AttendanceStatus.LATE: "bg-warning text-dark",
    AttendanceStatus.ABSENT: "bg-danger",
}


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
        calculator: Optional[HoursCalculator] = None,
    ):
        self._attendance = attendance
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._calculator = calculator or WallClockHoursCalculator()

    def fetch_state(self, user_id: int) -> AttendanceState:
        history = list(self._attendance.list_for_user(int(user_id)))
        current = next((r for r in history if r.is_open), None)
        return AttendanceState(history=history, current=current)

    def check_in(self, user_id: int, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or now_local()

        if self._attendance.get_open_for_user(int(user_id)):
            raise ValidationError("You are already checked in")

        strategy = self._factory.for_checkin(now=now)
        decision = strategy.decide_checkin(now=now, cutoff=self._factory.cutoff)

        attendance_id = self._attendance.create_checkin(user_id=int(user_id), check_in=now, status=decision.status)
        logger.info("User %s checked in at %s (%s)", user_id, now.isoformat(), decision.status.value)
        return AttendanceRecord(
            id=attendance_id,
            user_id=int(user_id),
            check_in=now,
            check_out=None,
            total_hours=None,
            status=decision.status,
        )

    def check_out(self, user_id: int, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or now_local()

        record = self._attendance.get_open_for_user(int(user_id))
        if not record:
            raise ValidationError("You are not checked in")

        total_hours = self._calculator.total_hours(record.check_in, now)
        if not self._attendance.close_record(attendance_id=record.id, check_out=now, total_hours=total_hours):
            raise ValidationError("This check-in was already closed")

        logger.info("User %s checked out at %s (%.2f h)", user_id, now.isoformat(), total_hours)
        return AttendanceRecord(
            id=record.id,
            user_id=record.user_id,
            check_in=record.check_in,
            check_out=now,
            total_hours=total_hours,
            status=record.status,
        )

    def toggle(self, user_id: int, *, now: Optional[datetime] = None) -> AttendanceRecord:
        """Check in when no record is open, otherwise check out."""

        if self._attendance.get_open_for_user(int(user_id)):
            return self.check_out(user_id, now=now)
        return self.check_in(user_id, now=now)

    def to_ui(self, r: AttendanceRecord) -> dict:
        return {
            "date": r.check_in.strftime("%b %d, %Y"),
            "check_in": r.check_in.strftime("%I:%M %p"),
            "check_out": r.check_out.strftime("%I:%M %p") if r.check_out else "-",
            "total_hours": f"{r.total_hours:.2f}" if r.total_hours is not None else "-",
            "status": STATUS_LABELS[r.status],
            "css_class": STATUS_CSS[r.status],
        }
