from datetime import date, datetime, time

import pytest

from src.worktrack.worktrack.common.datetime_utils import end_of_day, parse_clock, parse_local_datetime
from src.worktrack.worktrack.common.validators import clean_phone_number, is_valid_phone_number
from src.worktrack.worktrack.core.exceptions import ValidationError


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2024-06-10T09:30", datetime(2024, 6, 10, 9, 30)),
        ("2024-06-10T09:30:15", datetime(2024, 6, 10, 9, 30, 15)),
        ("2024-06-10", datetime(2024, 6, 10)),
        ("  ", None),
    ],
)
def test_parse_local_datetime(value, expected):
    assert parse_local_datetime(value) == expected


def test_parse_local_datetime_rejects_garbage():
    with pytest.raises(ValidationError):
        parse_local_datetime("10/06/2024")


def test_parse_clock():
    assert parse_clock("09:00") == time(9, 0)
    with pytest.raises(ValidationError):
        parse_clock("9am")


def test_end_of_day_is_last_millisecond():
    assert end_of_day(date(2024, 6, 20)) == datetime(2024, 6, 20, 23, 59, 59, 999000)


@pytest.mark.parametrize(
    "raw, valid",
    [
        ("+20 100 123 4567", True),
        ("+1-202-555-0123", True),
        ("+1234567890", False),
        ("0201001234567", False),
        ("+1234567890123456", False),
    ],
)
def test_phone_numbers(raw, valid):
    assert is_valid_phone_number(raw) is valid


def test_clean_phone_number_keeps_digits_and_plus():
    assert clean_phone_number("+20 (100) 123-4567") == "+201001234567"
