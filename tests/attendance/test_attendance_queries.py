from __future__ import annotations

from datetime import date, datetime

import pytest

from hr_portal.access.factory import AccessScopeFactory
from hr_portal.access.model import Caller
from hr_portal.access.scopes.employee_scope import EmployeeScope
from hr_portal.attendance.model import AttendanceRecord
from hr_portal.attendance.service import AttendanceService
from hr_portal.common.geo import GeoPoint
from hr_portal.core.constants import LOCATION_NOT_AVAILABLE
from hr_portal.core.enums import Role
from hr_portal.core.exceptions import AuthorizationError, NotFoundError, ValidationError

from tests.fakes import (
    ADMIN_ID,
    COLLEAGUE_ID,
    EMPLOYEE_ID,
    OTHER_TEAM_ID,
    SUPERADMIN_ID,
    FakeResolver,
)


@pytest.fixture
def seeded(attendance_repo):
    attendance_repo.add(
        AttendanceRecord(
            1,
            EMPLOYEE_ID,
            datetime(2024, 3, 1, 9, 0),
            punch_in_location=GeoPoint(12.5, 77.25),
            punch_in_address="MG Road, Bengaluru",
            punch_out_time=datetime(2024, 3, 1, 17, 0),
            punch_out_location=GeoPoint(12.5, 77.25),
        )
    )
    attendance_repo.add(AttendanceRecord(2, EMPLOYEE_ID, datetime(2024, 3, 2, 23, 59, 59, 999000)))
    attendance_repo.add(AttendanceRecord(3, COLLEAGUE_ID, datetime(2024, 3, 2, 10, 0)))
    attendance_repo.add(AttendanceRecord(4, OTHER_TEAM_ID, datetime(2024, 3, 3, 0, 0)))
    return attendance_repo


def _ids(rows):
    return [r["attendance_id"] for r in rows]


def test_employee_sees_only_own_records_newest_first(attendance_service, seeded):
    rows = attendance_service.get_attendance(Caller(EMPLOYEE_ID, Role.EMPLOYEE))

    assert _ids(rows) == [2, 1]


def test_admin_sees_owned_employees(attendance_service, seeded):
    rows = attendance_service.get_attendance(Caller(ADMIN_ID, Role.ADMIN))

    assert _ids(rows) == [2, 3, 1]


def test_superadmin_sees_everyone(attendance_service, seeded):
    rows = attendance_service.get_attendance(Caller(SUPERADMIN_ID, Role.SUPERADMIN))

    assert _ids(rows) == [4, 2, 3, 1]


def test_unknown_role_is_unauthorized(attendance_repo, employees, lock):
    svc = AttendanceService(
        attendance_repo,
        employees,
        lock,
        scopes=AccessScopeFactory(registry={Role.EMPLOYEE: EmployeeScope}),
    )

    with pytest.raises(AuthorizationError):
        svc.get_attendance(Caller(ADMIN_ID, Role.ADMIN))


def test_date_range_includes_last_millisecond_of_end_day(attendance_service, seeded):
    records = attendance_service.get_records_for_employee_set(
        None, start=date(2024, 3, 2), end=date(2024, 3, 2)
    )

    assert [r.attendance_id for r in records] == [2, 3]


def test_reversed_range_is_rejected(attendance_service):
    with pytest.raises(ValidationError):
        attendance_service.get_records_for_employee_set(None, start=date(2024, 3, 2), end=date(2024, 3, 1))


def test_address_fallbacks_for_display(attendance_service, seeded):
    rows = {r["attendance_id"]: r for r in attendance_service.get_attendance(Caller(EMPLOYEE_ID, Role.EMPLOYEE))}

    assert rows[1]["punch_in_address"] == "MG Road, Bengaluru"
    assert rows[1]["punch_out_address"] == "12.5, 77.25"
    assert rows[2]["punch_in_address"] == LOCATION_NOT_AVAILABLE


def test_get_records_for_employee(attendance_service, seeded):
    assert [r.attendance_id for r in attendance_service.get_records_for_employee(EMPLOYEE_ID)] == [2, 1]


def test_resolve_address(attendance_service, resolver):
    assert attendance_service.resolve_address(GeoPoint(10.0, 20.0)) == resolver.address
    assert resolver.calls == [(10.0, 20.0)]


def test_resolve_address_unavailable_is_not_found(attendance_repo, employees, lock):
    svc = AttendanceService(attendance_repo, employees, lock, resolver=FakeResolver(address=None))

    with pytest.raises(NotFoundError):
        svc.resolve_address(GeoPoint(10.0, 20.0))


def test_resolve_address_without_resolver_is_not_found(attendance_repo, employees, lock):
    svc = AttendanceService(attendance_repo, employees, lock)

    with pytest.raises(NotFoundError):
        svc.resolve_address(GeoPoint(10.0, 20.0))
