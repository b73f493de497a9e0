from __future__ import annotations

from datetime import datetime

from hr_portal.attendance.model import AttendanceRecord
from hr_portal.core.enums import Role

from tests.fakes import ADMIN_ID, EMPLOYEE_ID, OTHER_ADMIN_ID, OTHER_TEAM_ID, SUPERADMIN_ID


def test_requires_session(client):
    resp = client.post("/api/attendance/punch-in", json={})

    assert resp.status_code == 401
    assert resp.get_json()["kind"] == "unauthenticated"


def test_punch_in_then_duplicate(login):
    client = login(EMPLOYEE_ID, Role.EMPLOYEE)

    first = client.post("/api/attendance/punch-in", json={"latitude": 12.97, "longitude": 77.59})
    assert first.status_code == 201
    body = first.get_json()
    assert body["success"] is True
    assert body["attendance"]["punch_in_location"] == {"latitude": 12.97, "longitude": 77.59}

    second = client.post("/api/attendance/punch-in", json={})
    assert second.status_code == 409
    assert second.get_json() == {
        "success": False,
        "kind": "duplicate_punch_in",
        "message": "You have already punched in today.",
    }


def test_punch_in_with_half_a_location(login):
    resp = login(EMPLOYEE_ID, Role.EMPLOYEE).post("/api/attendance/punch-in", json={"latitude": 12.97})

    assert resp.status_code == 400
    assert resp.get_json()["kind"] == "validation_error"


def test_punch_in_is_employee_only(login):
    resp = login(ADMIN_ID, Role.ADMIN).post("/api/attendance/punch-in", json={})

    assert resp.status_code == 403
    assert resp.get_json()["kind"] == "unauthorized"


def test_punch_out_without_session(login):
    resp = login(EMPLOYEE_ID, Role.EMPLOYEE).post("/api/attendance/punch-out", json={})

    assert resp.status_code == 409
    assert resp.get_json()["kind"] == "no_open_session"


def test_punch_out_returns_closed_record(login):
    client = login(EMPLOYEE_ID, Role.EMPLOYEE)
    client.post("/api/attendance/punch-in", json={})

    resp = client.post("/api/attendance/punch-out", json={})

    assert resp.status_code == 200
    assert resp.get_json()["attendance"]["punch_out"] is not None


def test_attendance_list_is_scoped(login, attendance_repo):
    attendance_repo.add(AttendanceRecord(1, EMPLOYEE_ID, datetime(2024, 3, 1, 9, 0)))
    attendance_repo.add(AttendanceRecord(2, OTHER_TEAM_ID, datetime(2024, 3, 1, 9, 0)))

    admin_rows = login(ADMIN_ID, Role.ADMIN).get("/api/attendance?start=2024-03-01&end=2024-03-31").get_json()
    assert [r["attendance_id"] for r in admin_rows["attendance"]] == [1]

    all_rows = login(SUPERADMIN_ID, Role.SUPERADMIN).get("/api/attendance").get_json()
    assert sorted(r["attendance_id"] for r in all_rows["attendance"]) == [1, 2]


def test_attendance_list_rejects_bad_date(login):
    resp = login(EMPLOYEE_ID, Role.EMPLOYEE).get("/api/attendance?start=03/01/2024")

    assert resp.status_code == 400


def test_admin_punch_in_for_employee(login):
    client = login(ADMIN_ID, Role.ADMIN)

    missing = client.post(f"/api/admin/employees/{EMPLOYEE_ID}/punch-in", json={})
    assert missing.status_code == 400

    foreign = client.post(f"/api/admin/employees/{OTHER_TEAM_ID}/punch-in", json={"latitude": 1, "longitude": 2})
    assert foreign.status_code == 404
    assert foreign.get_json()["kind"] == "not_found"

    ok = client.post(f"/api/admin/employees/{EMPLOYEE_ID}/punch-in", json={"latitude": 1, "longitude": 2})
    assert ok.status_code == 201
    assert ok.get_json()["attendance"]["employee_id"] == EMPLOYEE_ID


def test_reverse_geocode(login, resolver):
    client = login(EMPLOYEE_ID, Role.EMPLOYEE)

    resp = client.post("/api/geocode/reverse", json={"latitude": 51.5, "longitude": -0.12})
    assert resp.status_code == 200
    assert resp.get_json()["address"] == resolver.address

    missing = client.post("/api/geocode/reverse", json={"latitude": 51.5})
    assert missing.status_code == 400

    resolver.address = None
    unavailable = client.post("/api/geocode/reverse", json={"latitude": 51.5, "longitude": -0.12})
    assert unavailable.status_code == 404


def test_leave_lifecycle(client, login):
    login(EMPLOYEE_ID, Role.EMPLOYEE)
    created = client.post(
        "/api/leaves",
        json={"start_date": "2024-02-01", "end_date": "2024-02-05", "reason": "Trip", "leave_type": "Earned"},
    )
    assert created.status_code == 201
    leave = created.get_json()["leave"]
    assert leave["status"] == "pending"
    assert leave["leave_type"] == "Earned"

    clash = client.post("/api/leaves", json={"start_date": "2024-02-04", "end_date": "2024-02-10", "reason": "x"})
    assert clash.status_code == 409
    assert clash.get_json()["kind"] == "overlapping_leave"

    login(OTHER_ADMIN_ID, Role.ADMIN)
    denied = client.put(f"/api/admin/leaves/{leave['leave_id']}/status", json={"status": "approved"})
    assert denied.status_code == 403

    login(ADMIN_ID, Role.ADMIN)
    bad = client.put(f"/api/admin/leaves/{leave['leave_id']}/status", json={"status": "maybe"})
    assert bad.status_code == 400
    approved = client.put(f"/api/admin/leaves/{leave['leave_id']}/status", json={"status": "approved"})
    assert approved.status_code == 200
    assert approved.get_json()["leave"]["status"] == "approved"

    listed = client.get("/api/leaves").get_json()["leaves"]
    assert [item["leave_id"] for item in listed] == [leave["leave_id"]]


def test_leave_missing_fields(login):
    resp = login(EMPLOYEE_ID, Role.EMPLOYEE).post("/api/leaves", json={"start_date": "2024-02-01"})

    assert resp.status_code == 400


def test_leave_reason_must_be_text(login):
    resp = login(EMPLOYEE_ID, Role.EMPLOYEE).post(
        "/api/leaves",
        json={"start_date": "2024-02-01", "end_date": "2024-02-05", "reason": 123},
    )

    assert resp.status_code == 400
    assert resp.get_json()["kind"] == "validation_error"


def test_salary_slip(login, attendance_repo):
    attendance_repo.add(
        AttendanceRecord(1, EMPLOYEE_ID, datetime(2024, 3, 1, 9, 0), punch_out_time=datetime(2024, 3, 1, 17, 0))
    )
    attendance_repo.add(
        AttendanceRecord(2, EMPLOYEE_ID, datetime(2024, 3, 2, 9, 0), punch_out_time=datetime(2024, 3, 2, 11, 0))
    )
    client = login(ADMIN_ID, Role.ADMIN)

    resp = client.get(f"/api/admin/employees/{EMPLOYEE_ID}/salary-slip?from=2024-03-01&to=2024-03-03")
    assert resp.status_code == 200
    summary = resp.get_json()["slip"]["summary"]
    assert summary == {"full": 1, "half": 1, "absent": 0, "payable_days": 1.5, "payable_amount": 1500.0}

    foreign = client.get(f"/api/admin/employees/{OTHER_TEAM_ID}/salary-slip?from=2024-03-01&to=2024-03-03")
    assert foreign.status_code == 404

    missing = client.get(f"/api/admin/employees/{EMPLOYEE_ID}/salary-slip?from=2024-03-01")
    assert missing.status_code == 400


def test_unexpected_errors_are_opaque(login, container, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("db password is hunter2")

    monkeypatch.setattr(container.attendance_service, "get_attendance", boom)

    resp = login(EMPLOYEE_ID, Role.EMPLOYEE).get("/api/attendance")

    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "kind": "internal_error", "message": "Internal server error"}


def test_unknown_route_is_json(client):
    resp = client.get("/api/nope")

    assert resp.status_code == 404
    assert resp.get_json()["success"] is False
