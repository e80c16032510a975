from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

from ..core.exceptions import ValidationError

END_OF_DAY = time(23, 59, 59, 999000)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError("Invalid date (YYYY-MM-DD)")


def parse_local_datetime(value: str) -> Optional[datetime]:
    """Parse the value of an HTML ``datetime-local`` input.

    Accepts ``YYYY-MM-DDTHH:MM`` (optionally with seconds) or a bare date.
    Empty input gives None.
    """
    v = (value or "").strip()
    if not v:
        return None
    for fmt in ("%Y-%m-%dT%H:%M", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d"):
        try:
            return datetime.strptime(v, fmt)
        except ValueError:
            continue
    raise ValidationError("Invalid date/time")


def parse_clock(value: str) -> time:
    """Parse HH:MM into a time of day."""
    try:
        return datetime.strptime((value or "").strip(), "%H:%M").time()
    except ValueError:
        raise ValidationError("Invalid time (HH:MM)")


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, END_OF_DAY)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
