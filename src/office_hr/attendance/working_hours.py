from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from ..core.exceptions import InvalidIntervalError

_TWO_PLACES = Decimal("0.01")
_SECONDS_PER_HOUR = Decimal(3600)


def compute_working_hours(check_in: datetime, check_out: datetime) -> Decimal:
    """Elapsed hours between check-in and check-out, rounded to 2 places."""
    if check_out <= check_in:
        raise InvalidIntervalError("Check-out must be after check-in")
    seconds = Decimal(str((check_out - check_in).total_seconds()))
    return (seconds / _SECONDS_PER_HOUR).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)
