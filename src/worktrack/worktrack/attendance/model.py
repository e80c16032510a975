from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one check-in, closed by at most one check-out."""

    id: int
    user_id: int
    check_in: datetime
    check_out: Optional[datetime]
    total_hours: Optional[float]
    status: AttendanceStatus

    @property
    def is_open(self) -> bool:
        return self.check_out is None


@dataclass(frozen=True)
class AttendanceState:
    """History (newest first) plus the open record, if any."""

    history: Sequence[AttendanceRecord]
    current: Optional[AttendanceRecord]

    @property
    def is_checked_in(self) -> bool:
        return self.current is not None
