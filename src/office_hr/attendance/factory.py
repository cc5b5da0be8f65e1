from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time

from ..core.constants import DEFAULT_CHECKIN_CUTOFF
from ..core.enums import AttendanceStatus
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the check-in strategy against the daily cutoff.

    The comparison uses the local time-of-day of the check-in; a check-in
    exactly at the cutoff is still on time.
    """

    cutoff: time = DEFAULT_CHECKIN_CUTOFF

    def for_checkin(self, *, check_in: datetime) -> AttendanceStrategy:
        if check_in.time() > self.cutoff:
            return LateStrategy()
        return PresentStrategy()


def classify_check_in(check_in: datetime, cutoff: time = DEFAULT_CHECKIN_CUTOFF) -> AttendanceStatus:
    strategy = AttendanceStrategyFactory(cutoff=cutoff).for_checkin(check_in=check_in)
    return strategy.decide_checkin(check_in=check_in).status
