from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..access.factory import AccessScopeFactory
from ..access.model import Caller
from ..common.datetime_utils import day_window, inclusive_day_range, now_local, truncate_to_millis
from ..common.geo import GeoPoint
from ..common.locking import EmployeeLock
from ..common.validators import require_location
from ..core.constants import LOCATION_NOT_AVAILABLE
from ..core.enums import PunchKind
from ..core.exceptions import (
    DuplicatePunchInError,
    DuplicatePunchOutError,
    GeocodeUnavailable,
    NoOpenSessionError,
    NotFoundError,
    ValidationError,
)
from ..core.logging_config import get_logger
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..geocoding.resolver import DisabledGeocodeResolver, GeocodeResolver
from .enrichment import AddressEnricher
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = get_logger("attendance.service")


class AttendanceService:
    """Punch-in/punch-out ledger.

    Rules:
    - one punch-in per employee per local calendar day
    - one punch-out per employee per local calendar day
    - punch-out closes the latest open session, even one opened before midnight

    Every check-then-act runs inside ``lock.hold(employee_id)``.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        lock: EmployeeLock,
        *,
        enricher: Optional[AddressEnricher] = None,
        resolver: Optional[GeocodeResolver] = None,
        scopes: Optional[AccessScopeFactory] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._lock = lock
        self._enricher = enricher
        self._resolver = resolver or DisabledGeocodeResolver()
        self._scopes = scopes or AccessScopeFactory()

    def _require_active_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee or not employee.is_active:
            raise ValidationError("Employee does not exist or is inactive")
        return employee

    @staticmethod
    def _checked(location: Optional[GeoPoint]) -> Optional[GeoPoint]:
        if location is None:
            return None
        return require_location(location.latitude, location.longitude)

    def _enrich(self, record: AttendanceRecord, kind: PunchKind, location: Optional[GeoPoint]) -> None:
        if location is None or self._enricher is None:
            return
        self._enricher.submit(attendance_id=record.attendance_id, kind=kind, location=location)

    def punch_in(
        self,
        employee_id: int,
        *,
        now: Optional[datetime] = None,
        location: Optional[GeoPoint] = None,
    ) -> AttendanceRecord:
        now = truncate_to_millis(now or now_local())
        location = self._checked(location)
        self._require_active_employee(employee_id)

        start, end = day_window(now)
        with self._lock.hold(employee_id):
            if self._attendance.find_punch_in_between(int(employee_id), start, end):
                raise DuplicatePunchInError("You have already punched in today.")

            record = self._attendance.create_punch_in(
                employee_id=int(employee_id),
                punch_in_time=now,
                location=location,
            )
            if record is None:
                raise DuplicatePunchInError("You have already punched in today.")

        logger.info("punch in", extra={"employee_id": int(employee_id), "attendance_id": record.attendance_id})
        self._enrich(record, PunchKind.PUNCH_IN, location)
        return record

    def punch_in_for_employee(
        self,
        admin_id: int,
        employee_id: int,
        *,
        location: Optional[GeoPoint],
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        """Admin punches in an employee they own; location is mandatory here."""
        if location is None:
            raise ValidationError("Location (latitude and longitude) is required")

        if not self._employees.get_for_admin(int(employee_id), int(admin_id)):
            raise NotFoundError("Employee not found or not under this admin")

        return self.punch_in(employee_id, now=now, location=location)

    def punch_out(
        self,
        employee_id: int,
        *,
        now: Optional[datetime] = None,
        location: Optional[GeoPoint] = None,
    ) -> AttendanceRecord:
        """Close the latest open session and return the updated record."""
        now = truncate_to_millis(now or now_local())
        location = self._checked(location)

        start, end = day_window(now)
        with self._lock.hold(employee_id):
            if self._attendance.find_punch_out_between(int(employee_id), start, end):
                raise DuplicatePunchOutError("You have already punched out today.")

            record = self._attendance.get_latest_open(int(employee_id))
            if record is None:
                raise NoOpenSessionError("No active punch-in found to punch out.")

            if not self._attendance.close_session(
                attendance_id=record.attendance_id,
                punch_out_time=now,
                location=location,
            ):
                # Lost a race with a writer outside this lock.
                raise NoOpenSessionError("No active punch-in found to punch out.")

        closed = AttendanceRecord(
            attendance_id=record.attendance_id,
            employee_id=record.employee_id,
            punch_in_time=record.punch_in_time,
            punch_in_location=record.punch_in_location,
            punch_in_address=record.punch_in_address,
            punch_out_time=now,
            punch_out_location=location,
            created_at=record.created_at,
        )
        logger.info("punch out", extra={"employee_id": int(employee_id), "attendance_id": closed.attendance_id})
        self._enrich(closed, PunchKind.PUNCH_OUT, location)
        return closed

    def get_records_for_employee(self, employee_id: int) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_employees(employee_ids=[int(employee_id)])

    def get_records_for_employee_set(
        self,
        employee_ids: Optional[Sequence[int]],
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records of ``employee_ids`` (None = everyone), newest punch-in first.

        ``start``/``end`` are whole days: 00:00:00.000 to 23:59:59.999.
        """
        if start and end and start > end:
            raise ValidationError("End date must be on or after start date")

        start_dt = inclusive_day_range(start, start)[0] if start else None
        end_dt = inclusive_day_range(end, end)[1] if end else None
        return self._attendance.list_for_employees(employee_ids=employee_ids, start=start_dt, end=end_dt)

    def get_attendance(
        self,
        caller: Caller,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[dict]:
        scope = self._scopes.for_caller(caller)
        employee_ids = scope.employee_ids(self._employees)
        records = self.get_records_for_employee_set(employee_ids, start=start, end=end)
        return [self._to_view(r) for r in records]

    def resolve_address(self, location: GeoPoint) -> str:
        location = require_location(location.latitude, location.longitude)
        try:
            return self._resolver.reverse(location.latitude, location.longitude)
        except GeocodeUnavailable as e:
            logger.warning("reverse geocode lookup failed", extra={"reason": str(e)})
            raise NotFoundError("Address not found for the given coordinates")

    @staticmethod
    def _display_address(address: Optional[str], location: Optional[GeoPoint]) -> str:
        if address:
            return address
        if location:
            return str(location)
        return LOCATION_NOT_AVAILABLE

    def _to_view(self, r: AttendanceRecord) -> dict:
        view = r.to_dict()
        view["punch_in_address"] = self._display_address(r.punch_in_address, r.punch_in_location)
        view["punch_out_address"] = self._display_address(r.punch_out_address, r.punch_out_location)
        return view
