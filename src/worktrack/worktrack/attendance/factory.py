from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time

from ..core.constants import DEFAULT_WORKDAY_START
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules.

    The cutoff is a local time of day applied to the check-in's own date;
    anything strictly after it is late.
    """

    cutoff: time = DEFAULT_WORKDAY_START

    def for_checkin(self, *, now: datetime) -> AttendanceStrategy:
        start_of_work_day = datetime.combine(now.date(), self.cutoff)
        if now > start_of_work_day:
            return LateStrategy()
        return PresentStrategy()
