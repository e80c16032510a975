from __future__ import annotations

import re

from ..core.exceptions import ValidationError

_PHONE_RE = re.compile(r"^\+\d{11,15}$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def clean_phone_number(phone: str) -> str:
    """Drop everything except digits and '+'."""
    return re.sub(r"[^\d+]", "", phone or "")


def is_valid_phone_number(phone: str) -> bool:
    return bool(_PHONE_RE.match(clean_phone_number(phone)))


def require_phone_number(phone: str) -> str:
    cleaned = clean_phone_number(phone)
    if not _PHONE_RE.match(cleaned):
        raise ValidationError("Please enter a valid phone number with country code (e.g., +12025550123)")
    return cleaned
