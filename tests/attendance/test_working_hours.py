from datetime import datetime
from decimal import Decimal

import pytest

from office_hr.attendance.working_hours import compute_working_hours
from office_hr.core.exceptions import InvalidIntervalError


def test_full_day_hours():
    hours = compute_working_hours(datetime(2026, 3, 2, 9, 0), datetime(2026, 3, 2, 17, 30))
    assert hours == Decimal("8.50")


def test_hours_rounded_to_two_places():
    # 20 minutes = 0.3333.. h
    hours = compute_working_hours(datetime(2026, 3, 2, 9, 0), datetime(2026, 3, 2, 9, 20))
    assert hours == Decimal("0.33")


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (9, Decimal("0.00")),  # 0.0025 h
        (18, Decimal("0.01")),  # 0.005 h, exactly on the half
        (54, Decimal("0.02")),  # 0.015 h
    ],
)
def test_hours_round_half_up(seconds, expected):
    hours = compute_working_hours(datetime(2026, 3, 2, 9, 0, 0), datetime(2026, 3, 2, 9, 0, seconds))
    assert hours == expected


@pytest.mark.parametrize(
    "check_out",
    [datetime(2026, 3, 2, 9, 0), datetime(2026, 3, 2, 8, 0)],
)
def test_checkout_not_after_checkin_is_rejected(check_out):
    with pytest.raises(InvalidIntervalError):
        compute_working_hours(datetime(2026, 3, 2, 9, 0), check_out)
