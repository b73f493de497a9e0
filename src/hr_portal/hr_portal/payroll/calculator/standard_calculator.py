from __future__ import annotations

from typing import Optional

from .base import DayClassification, PayrollCalculator
from ...attendance.model import AttendanceRecord
from ...common.datetime_utils import hours_between
from ...core.constants import FULL_DAY_CREDIT, FULL_DAY_HOURS, HALF_DAY_CREDIT
from ...core.enums import DayType


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: >= 6h Full, (0, 6)h Half, otherwise Absent.

    A session without punch-out counts as Absent with 0.0 hours.
    """

    def __init__(self, *, full_day_hours: float = FULL_DAY_HOURS):
        self._full_day_hours = float(full_day_hours)

    def classify(self, record: AttendanceRecord) -> DayClassification:
        if not record.punch_out_time:
            return DayClassification(DayType.ABSENT, 0.0, 0.0)

        hours = hours_between(record.punch_in_time, record.punch_out_time)
        if hours >= self._full_day_hours:
            day_type, credit = DayType.FULL, FULL_DAY_CREDIT
        elif hours > 0:
            day_type, credit = DayType.HALF, HALF_DAY_CREDIT
        else:
            day_type, credit = DayType.ABSENT, 0.0

        # classification uses the exact duration, rounding is for display only
        return DayClassification(day_type, credit, round(hours, 2))

    def payable_amount(self, payable_days: float, salary_rate: Optional[float]) -> float:
        return float(payable_days) * float(salary_rate or 0)
