from __future__ import annotations

import pytest

from hr_portal.attendance.service import AttendanceService
from hr_portal.common.locking import InProcessEmployeeLock
from hr_portal.container import wire_services
from hr_portal.core.enums import Role
from hr_portal.core.logging_config import reset_logging
from hr_portal.employees.model import Employee
from hr_portal.leaves.service import LeaveService
from hr_portal.payroll.service import PayrollService

from tests.fakes import (
    ADMIN_ID,
    COLLEAGUE_ID,
    EMPLOYEE_ID,
    INACTIVE_ID,
    OTHER_ADMIN_ID,
    OTHER_TEAM_ID,
    SUPERADMIN_ID,
    UNLINKED_ID,
    FakeResolver,
    InMemoryAttendance,
    InMemoryEmployees,
    InMemoryLeaves,
)


@pytest.fixture
def employees() -> InMemoryEmployees:
    return InMemoryEmployees(
        [
            Employee(SUPERADMIN_ID, None, "Root", "root@example.com", role=Role.SUPERADMIN),
            Employee(ADMIN_ID, SUPERADMIN_ID, "Ada Admin", "ada@example.com", role=Role.ADMIN),
            Employee(OTHER_ADMIN_ID, SUPERADMIN_ID, "Otto Admin", "otto@example.com", role=Role.ADMIN),
            Employee(EMPLOYEE_ID, ADMIN_ID, "Eve", "eve@example.com", salary_rate=1000.0),
            Employee(COLLEAGUE_ID, ADMIN_ID, "Carl", "carl@example.com"),
            Employee(INACTIVE_ID, ADMIN_ID, "Ina", "ina@example.com", is_active=False),
            Employee(OTHER_TEAM_ID, OTHER_ADMIN_ID, "Olga", "olga@example.com", salary_rate=500.0),
            Employee(UNLINKED_ID, None, "Uma", "uma@example.com"),
        ]
    )


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def leaves_repo() -> InMemoryLeaves:
    return InMemoryLeaves()


@pytest.fixture
def lock() -> InProcessEmployeeLock:
    return InProcessEmployeeLock(timeout_seconds=2.0)


@pytest.fixture
def resolver() -> FakeResolver:
    return FakeResolver()


@pytest.fixture
def attendance_service(attendance_repo, employees, lock, resolver) -> AttendanceService:
    return AttendanceService(attendance_repo, employees, lock, resolver=resolver)


@pytest.fixture
def leave_service(leaves_repo, employees, lock) -> LeaveService:
    return LeaveService(leaves_repo, employees, lock)


@pytest.fixture
def payroll_service(attendance_repo, employees) -> PayrollService:
    return PayrollService(attendance_repo, employees)


@pytest.fixture
def container(employees, attendance_repo, leaves_repo, lock, resolver):
    c = wire_services(
        employees_repo=employees,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        lock=lock,
        resolver=resolver,
        enrichment_workers=0,
    )
    yield c
    c.close()


@pytest.fixture
def app(container, monkeypatch):
    from hr_portal.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    flask_app = create_app(container=container)
    yield flask_app
    reset_logging()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(user_id: int, role: Role):
        with client.session_transaction() as sess:
            sess["user_id"] = user_id
            sess["role"] = role.value
        return client

    return _login
