from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...attendance.model import AttendanceRecord
from ...core.enums import DayType


@dataclass(frozen=True)
class DayClassification:
    day_type: DayType
    credit: float
    hours: float


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def classify(self, record: AttendanceRecord) -> DayClassification:
        raise NotImplementedError

    @abstractmethod
    def payable_amount(self, payable_days: float, salary_rate: Optional[float]) -> float:
        raise NotImplementedError
