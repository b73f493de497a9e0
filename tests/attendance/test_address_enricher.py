from __future__ import annotations

import logging
from datetime import datetime

from hr_portal.attendance.enrichment import AddressEnricher
from hr_portal.attendance.model import AttendanceRecord
from hr_portal.attendance.service import AttendanceService
from hr_portal.common.geo import GeoPoint
from hr_portal.core.enums import PunchKind

from tests.fakes import EMPLOYEE_ID, FakeResolver

SPOT = GeoPoint(latitude=48.8584, longitude=2.2945)


def test_enrichment_writes_punch_in_address(attendance_repo):
    attendance_repo.add(AttendanceRecord(1, EMPLOYEE_ID, datetime(2024, 1, 1, 9, 0), punch_in_location=SPOT))
    enricher = AddressEnricher(attendance_repo, FakeResolver("Champ de Mars, Paris"), max_workers=1)

    future = enricher.submit(attendance_id=1, kind=PunchKind.PUNCH_IN, location=SPOT)
    enricher.shutdown()

    assert future.result() == "Champ de Mars, Paris"
    rec = attendance_repo.get_by_id(1)
    assert rec.punch_in_address == "Champ de Mars, Paris"
    assert rec.punch_out_address is None


def test_enrichment_failure_is_logged_and_swallowed(attendance_repo, caplog):
    attendance_repo.add(AttendanceRecord(1, EMPLOYEE_ID, datetime(2024, 1, 1, 9, 0), punch_in_location=SPOT))
    enricher = AddressEnricher(attendance_repo, FakeResolver(address=None), max_workers=1)

    with caplog.at_level(logging.WARNING, logger="hr_portal.attendance.enrichment"):
        future = enricher.submit(attendance_id=1, kind=PunchKind.PUNCH_IN, location=SPOT)
        enricher.shutdown()

    assert future.result() is None
    assert attendance_repo.get_by_id(1).punch_in_address is None
    assert any("geocoding failed" in r.getMessage() for r in caplog.records)


def test_submit_after_shutdown_is_skipped(attendance_repo):
    enricher = AddressEnricher(attendance_repo, FakeResolver(), max_workers=1)
    enricher.shutdown()

    assert enricher.submit(attendance_id=1, kind=PunchKind.PUNCH_IN, location=SPOT) is None


def test_punches_with_location_are_enriched_in_background(attendance_repo, employees, lock):
    resolver = FakeResolver("Eiffel Tower")
    enricher = AddressEnricher(attendance_repo, resolver, max_workers=2)
    svc = AttendanceService(attendance_repo, employees, lock, enricher=enricher, resolver=resolver)

    rec = svc.punch_in(EMPLOYEE_ID, now=datetime(2024, 1, 1, 9, 0), location=SPOT)
    svc.punch_out(EMPLOYEE_ID, now=datetime(2024, 1, 1, 17, 0), location=SPOT)
    enricher.shutdown(wait=True)

    stored = attendance_repo.get_by_id(rec.attendance_id)
    assert stored.punch_in_address == "Eiffel Tower"
    assert stored.punch_out_address == "Eiffel Tower"
    assert len(resolver.calls) == 2


def test_punch_without_location_does_not_call_geocoder(attendance_repo, employees, lock):
    resolver = FakeResolver()
    enricher = AddressEnricher(attendance_repo, resolver, max_workers=1)
    svc = AttendanceService(attendance_repo, employees, lock, enricher=enricher, resolver=resolver)

    svc.punch_in(EMPLOYEE_ID, now=datetime(2024, 1, 1, 9, 0))
    enricher.shutdown()

    assert resolver.calls == []
