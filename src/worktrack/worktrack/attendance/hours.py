from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime


class HoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked hours)."""

    @abstractmethod
    def total_hours(self, check_in: datetime, check_out: datetime) -> float:
        raise NotImplementedError


class WallClockHoursCalculator(HoursCalculator):
    """Standard rule: (out - in) in hours, rounded to 2 decimals.

    Plain wall-clock difference; a shift over midnight is not split.
    """

    def total_hours(self, check_in: datetime, check_out: datetime) -> float:
        return round((check_out - check_in).total_seconds() / 3600, 2)
