from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..access.factory import AccessScopeFactory
from ..access.model import Caller
from ..common.locking import EmployeeLock
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import (
    AuthorizationError,
    NotFoundError,
    OverlappingLeaveError,
    ValidationError,
)
from ..core.logging_config import get_logger
from ..employees.repository import EmployeeRepository
from .model import LeaveRequest
from .repository import LeaveRepository

logger = get_logger("leaves.service")

_DECISIONS = {LeaveStatus.APPROVED, LeaveStatus.REJECTED}


class LeaveService:
    def __init__(
        self,
        leaves: LeaveRepository,
        employees: EmployeeRepository,
        lock: EmployeeLock,
        *,
        scopes: Optional[AccessScopeFactory] = None,
    ):
        self._leaves = leaves
        self._employees = employees
        self._lock = lock
        self._scopes = scopes or AccessScopeFactory()

    @staticmethod
    def _parse_leave_type(value) -> LeaveType:
        if value is None or (isinstance(value, str) and not value.strip()):
            return LeaveType.CASUAL
        if isinstance(value, LeaveType):
            return value
        try:
            return LeaveType(str(value).strip())
        except ValueError:
            allowed = ", ".join(t.value for t in LeaveType)
            raise ValidationError(f"Invalid leave type (allowed: {allowed})")

    def request_leave(
        self,
        employee_id: int,
        owner_admin_id: Optional[int],
        start_date: Optional[date],
        end_date: Optional[date],
        reason: Optional[str],
        leave_type=None,
    ) -> LeaveRequest:
        """Create a pending leave request.

        ``owner_admin_id`` of None means "whoever owns the employee now"; a
        given value must match that owner.

        Overlap is checked against every leave of the employee regardless of
        status, and re-checked together with the insert under the employee lock.
        """
        if reason is not None and not isinstance(reason, str):
            raise ValidationError("Reason must be text")
        if not start_date or not end_date or not reason or not reason.strip():
            raise ValidationError("Start date, end date, and reason are required")
        if start_date > end_date:
            raise ValidationError("End date must be on or after start date")

        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        if employee.owner_admin_id is None:
            raise ValidationError("Employee is not linked to any admin")
        if owner_admin_id is not None and int(owner_admin_id) != employee.owner_admin_id:
            raise AuthorizationError("Employee is not under this admin")
        owner_admin_id = employee.owner_admin_id
        kind = self._parse_leave_type(leave_type)

        with self._lock.hold(employee_id):
            clash = self._leaves.find_overlapping(int(employee_id), start_date, end_date)
            if clash:
                raise OverlappingLeaveError("You already have a leave request for these dates")

            leave = self._leaves.create(
                employee_id=int(employee_id),
                owner_admin_id=int(owner_admin_id),
                leave_type=kind,
                start_date=start_date,
                end_date=end_date,
                reason=reason.strip(),
            )

        logger.info(
            "leave requested",
            extra={"employee_id": int(employee_id), "leave_id": leave.leave_id, "leave_type": kind.value},
        )
        return leave

    def request_leave_for_employee(
        self,
        employee_id: int,
        start_date: Optional[date],
        end_date: Optional[date],
        reason: Optional[str],
        leave_type=None,
    ) -> LeaveRequest:
        """``request_leave`` on behalf of the employee's current owner."""
        return self.request_leave(
            employee_id,
            None,
            start_date,
            end_date,
            reason,
            leave_type,
        )

    def update_status(self, leave_id: int, acting_admin_id: int, new_status) -> LeaveRequest:
        try:
            status = LeaveStatus(new_status)
        except ValueError:
            raise ValidationError("Invalid status")
        if status not in _DECISIONS:
            raise ValidationError("Invalid status")

        leave = self._leaves.get_by_id(int(leave_id))
        if not leave:
            raise NotFoundError("Leave request not found")

        # Ownership is decided by the employee's current admin, not the one stored at request time.
        employee = self._employees.get_by_id(leave.employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        if employee.owner_admin_id != int(acting_admin_id):
            raise AuthorizationError("Unauthorized to update this leave")

        # Any -> approved/rejected, including re-deciding an already decided leave.
        self._leaves.set_status(leave.leave_id, status)

        logger.info(
            "leave status updated",
            extra={"leave_id": leave.leave_id, "from": leave.status.value, "to": status.value, "admin_id": int(acting_admin_id)},
        )
        return LeaveRequest(
            leave_id=leave.leave_id,
            employee_id=leave.employee_id,
            owner_admin_id=leave.owner_admin_id,
            leave_type=leave.leave_type,
            start_date=leave.start_date,
            end_date=leave.end_date,
            reason=leave.reason,
            status=status,
            created_at=leave.created_at,
        )

    def list_leaves(self, caller: Caller) -> Sequence[LeaveRequest]:
        scope = self._scopes.for_caller(caller)
        return self._leaves.list_for_employees(employee_ids=scope.employee_ids(self._employees))
