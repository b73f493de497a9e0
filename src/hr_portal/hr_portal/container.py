from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Optional

from .access.factory import AccessScopeFactory
from .attendance.enrichment import AddressEnricher
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.locking import EmployeeLock
from .core.constants import (
    DEFAULT_ENRICHMENT_WORKERS,
    DEFAULT_GEOCODER_TIMEOUT_SECONDS,
    DEFAULT_GEOCODER_URL,
    DEFAULT_GEOCODER_USER_AGENT,
    DEFAULT_LOCK_TIMEOUT_SECONDS,
)
from .core.logging_config import get_logger
from .database.connection import DBConfig, DatabaseConnection
from .database.locks import MySQLAdvisoryLock
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .geocoding.nominatim import NominatimGeocodeResolver
from .geocoding.resolver import DisabledGeocodeResolver, GeocodeResolver
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .payroll.service import PayrollService

logger = get_logger("container")


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository

    lock: EmployeeLock
    resolver: GeocodeResolver
    enricher: Optional[AddressEnricher]

    attendance_service: AttendanceService
    leave_service: LeaveService
    payroll_service: PayrollService

    def close(self) -> None:
        """Drain pending address lookups, then release the geocoder session."""
        if self.enricher is not None:
            self.enricher.shutdown(wait=True)
        self.resolver.close()


def build_resolver(settings: Optional[ModuleType]) -> GeocodeResolver:
    if not bool(getattr(settings, "GEOCODER_ENABLED", True)):
        return DisabledGeocodeResolver()
    return NominatimGeocodeResolver(
        url=getattr(settings, "GEOCODER_URL", DEFAULT_GEOCODER_URL),
        timeout_seconds=float(getattr(settings, "GEOCODER_TIMEOUT_SECONDS", DEFAULT_GEOCODER_TIMEOUT_SECONDS)),
        user_agent=getattr(settings, "GEOCODER_USER_AGENT", DEFAULT_GEOCODER_USER_AGENT),
    )


def wire_services(
    *,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    leaves_repo: LeaveRepository,
    lock: EmployeeLock,
    resolver: GeocodeResolver,
    enrichment_workers: int = DEFAULT_ENRICHMENT_WORKERS,
) -> Container:
    """Build services on top of already constructed repositories and collaborators."""
    scopes = AccessScopeFactory()
    enricher = None
    if enrichment_workers > 0:
        enricher = AddressEnricher(attendance_repo, resolver, max_workers=enrichment_workers)

    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        lock,
        enricher=enricher,
        resolver=resolver,
        scopes=scopes,
    )
    leave_service = LeaveService(leaves_repo, employees_repo, lock, scopes=scopes)
    payroll_service = PayrollService(attendance_repo, employees_repo)

    return Container(
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        lock=lock,
        resolver=resolver,
        enricher=enricher,
        attendance_service=attendance_service,
        leave_service=leave_service,
        payroll_service=payroll_service,
    )


def build_container(*, db_config: dict, settings: Optional[ModuleType] = None) -> Container:
    config = DBConfig.from_dict(db_config)
    conn = DatabaseConnection.get_instance(config)

    lock = MySQLAdvisoryLock(
        conn,
        timeout_seconds=float(getattr(settings, "LOCK_TIMEOUT_SECONDS", DEFAULT_LOCK_TIMEOUT_SECONDS)),
    )
    resolver = build_resolver(settings)
    logger.info("geocoder=%s", type(resolver).__name__)

    return wire_services(
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        lock=lock,
        resolver=resolver,
        enrichment_workers=int(getattr(settings, "ENRICHMENT_WORKERS", DEFAULT_ENRICHMENT_WORKERS)),
    )
