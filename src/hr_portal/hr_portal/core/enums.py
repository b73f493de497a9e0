from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Caller role used for scoping reads and authorizing decisions."""

    SUPERADMIN = "superadmin"
    ADMIN = "admin"
    EMPLOYEE = "employee"


class LeaveStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LeaveType(str, Enum):
    CASUAL = "Casual"
    SICK = "Sick"
    EARNED = "Earned"
    UNPAID = "Unpaid"


class DayType(str, Enum):
    """Payroll classification of a single attendance record."""

    FULL = "Full"
    HALF = "Half"
    ABSENT = "Absent"


class PunchKind(str, Enum):
    PUNCH_IN = "punch_in"
    PUNCH_OUT = "punch_out"
