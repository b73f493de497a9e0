from __future__ import annotations

from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import inclusive_day_range
from ..core.constants import NO_COMPANY
from ..core.enums import DayType
from ..core.exceptions import NotFoundError, ValidationError
from ..core.logging_config import get_logger
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import SalarySlip, SlipLine

logger = get_logger("payroll.service")


class PayrollService:
    """Salary slips derived from attendance history.

    Pure read: the same ledger state always yields the same slip.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._calculator = calculator or StandardPayrollCalculator()

    def _company_name(self, employee: Employee) -> str:
        """Employee's company, else the owning admin's, else ``NO_COMPANY``."""
        if employee.company:
            return employee.company
        if employee.owner_admin_id is not None:
            admin = self._employees.get_by_id(employee.owner_admin_id)
            if admin and admin.company:
                return admin.company
        return NO_COMPANY

    def compute_salary_slip(
        self,
        employee_id: int,
        owner_admin_id: int,
        start: Optional[date],
        end: Optional[date],
    ) -> SalarySlip:
        if not start or not end:
            raise ValidationError("From and to dates are required")
        if start > end:
            raise ValidationError("End date must be on or after start date")

        employee = self._employees.get_for_admin(int(employee_id), int(owner_admin_id))
        if not employee:
            raise NotFoundError("Employee not found or not under this admin")

        window_start, window_end = inclusive_day_range(start, end)
        records = self._attendance.list_for_employees(
            employee_ids=[employee.employee_id],
            start=window_start,
            end=window_end,
            ascending=True,
        )

        counts = {DayType.FULL: 0, DayType.HALF: 0, DayType.ABSENT: 0}
        lines: list[SlipLine] = []
        for r in records:
            c = self._calculator.classify(r)
            counts[c.day_type] += 1
            lines.append(
                SlipLine(
                    work_date=r.punch_in_time.date(),
                    punch_in=r.punch_in_time,
                    punch_out=r.punch_out_time,
                    hours=c.hours,
                    day_type=c.day_type,
                    credit=c.credit,
                )
            )

        payable_days = sum(line.credit for line in lines)
        payable_amount = self._calculator.payable_amount(payable_days, employee.salary_rate)

        logger.info(
            "salary slip computed",
            extra={
                "employee_id": employee.employee_id,
                "from": start.isoformat(),
                "to": end.isoformat(),
                "payable_days": payable_days,
            },
        )
        return SalarySlip(
            employee=employee,
            period_from=start,
            period_to=end,
            full=counts[DayType.FULL],
            half=counts[DayType.HALF],
            absent=counts[DayType.ABSENT],
            payable_days=payable_days,
            payable_amount=payable_amount,
            company_name=self._company_name(employee),
            records=lines,
        )
