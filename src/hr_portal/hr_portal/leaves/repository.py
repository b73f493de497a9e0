from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def create(
        self,
        *,
        employee_id: int,
        owner_admin_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: str,
    ) -> LeaveRequest:
        raise NotImplementedError

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def find_overlapping(self, employee_id: int, start_date: date, end_date: date) -> Optional[LeaveRequest]:
        """Any leave of the employee intersecting ``[start_date, end_date]``, whatever its status."""

        raise NotImplementedError

    def set_status(self, leave_id: int, status: LeaveStatus) -> None:
        raise NotImplementedError

    def list_for_employees(self, *, employee_ids: Optional[Sequence[int]]) -> Sequence[LeaveRequest]:
        """Newest first; ``employee_ids=None`` means every employee."""

        raise NotImplementedError
