from datetime import datetime, time

import pytest

from src.worktrack.worktrack.attendance.factory import AttendanceStrategyFactory
from src.worktrack.worktrack.attendance.strategies.late_strategy import LateStrategy
from src.worktrack.worktrack.attendance.strategies.present_strategy import PresentStrategy


@pytest.mark.parametrize(
    "now, expected",
    [
        (datetime(2024, 6, 10, 8, 30), PresentStrategy),
        (datetime(2024, 6, 10, 9, 0, 0), PresentStrategy),
        (datetime(2024, 6, 10, 9, 0, 1), LateStrategy),
        (datetime(2024, 6, 10, 9, 15), LateStrategy),
        (datetime(2024, 6, 10, 23, 59), LateStrategy),
    ],
)
def test_factory_compares_against_cutoff_on_checkin_date(now, expected):
    strategy = AttendanceStrategyFactory().for_checkin(now=now)

    assert isinstance(strategy, expected)


def test_factory_uses_configured_cutoff():
    factory = AttendanceStrategyFactory(cutoff=time(10, 0))

    assert isinstance(factory.for_checkin(now=datetime(2024, 6, 10, 9, 45)), PresentStrategy)
    assert isinstance(factory.for_checkin(now=datetime(2024, 6, 10, 10, 0, 30)), LateStrategy)
