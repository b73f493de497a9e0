from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveRequest:
    leave_id: int
    employee_id: int
    owner_admin_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: str
    status: LeaveStatus = LeaveStatus.PENDING
    created_at: Optional[datetime] = None

    def overlaps(self, start: date, end: date) -> bool:
        """Inclusive interval intersection with ``[start, end]``."""
        return self.start_date <= end and self.end_date >= start

    def to_dict(self) -> dict:
        return {
            "leave_id": self.leave_id,
            "employee_id": self.employee_id,
            "owner_admin_id": self.owner_admin_id,
            "leave_type": self.leave_type.value,
            "start_date": self.start_date.strftime("%Y-%m-%d"),
            "end_date": self.end_date.strftime("%Y-%m-%d"),
            "reason": self.reason,
            "status": self.status.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
