from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.constants import NO_COMPANY
from ..core.enums import DayType
from ..employees.model import Employee


@dataclass(frozen=True)
class SlipLine:
    work_date: date
    punch_in: datetime
    punch_out: Optional[datetime]
    hours: float
    day_type: DayType
    credit: float

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.strftime("%Y-%m-%d"),
            "punch_in": self.punch_in.isoformat(),
            "punch_out": self.punch_out.isoformat() if self.punch_out else None,
            "hours": self.hours,
            "type": self.day_type.value,
            "credit": self.credit,
        }


@dataclass(frozen=True)
class SalarySlip:
    employee: Employee
    period_from: date
    period_to: date
    full: int
    half: int
    absent: int
    payable_days: float
    payable_amount: float
    company_name: str = NO_COMPANY
    records: list[SlipLine] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "employee": self.employee.to_dict(),
            "company_name": self.company_name,
            "period": {
                "from": self.period_from.strftime("%Y-%m-%d"),
                "to": self.period_to.strftime("%Y-%m-%d"),
            },
            "summary": {
                "full": self.full,
                "half": self.half,
                "absent": self.absent,
                "payable_days": self.payable_days,
                "payable_amount": self.payable_amount,
            },
            "records": [line.to_dict() for line in self.records],
        }
