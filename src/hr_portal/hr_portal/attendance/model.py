from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.geo import GeoPoint


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one punch-in session of an employee."""

    attendance_id: int
    employee_id: int
    punch_in_time: datetime
    punch_in_location: Optional[GeoPoint] = None
    punch_in_address: Optional[str] = None
    punch_out_time: Optional[datetime] = None
    punch_out_location: Optional[GeoPoint] = None
    punch_out_address: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.punch_out_time is None

    def to_dict(self) -> dict:
        return {
            "attendance_id": self.attendance_id,
            "employee_id": self.employee_id,
            "punch_in": self.punch_in_time.isoformat(),
            "punch_in_location": self.punch_in_location.to_dict() if self.punch_in_location else None,
            "punch_in_address": self.punch_in_address,
            "punch_out": self.punch_out_time.isoformat() if self.punch_out_time else None,
            "punch_out_location": self.punch_out_location.to_dict() if self.punch_out_location else None,
            "punch_out_address": self.punch_out_address,
        }
