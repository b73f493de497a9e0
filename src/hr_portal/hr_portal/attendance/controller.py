from __future__ import annotations

from flask import Flask, request, session

from ..common.datetime_utils import parse_optional_date
from ..common.validators import optional_location, require_location
from ..common.web import current_caller, json_body, login_required, ok, role_required
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance/punch-in", methods=["POST"], endpoint="punch_in")
    @role_required(Role.EMPLOYEE)
    def punch_in():
        data = json_body()
        location = optional_location(data.get("latitude"), data.get("longitude"))
        record = service.punch_in(int(session["user_id"]), location=location)
        return ok(201, message="Punched in successfully", attendance=record.to_dict())

    @app.route("/api/attendance/punch-out", methods=["POST"], endpoint="punch_out")
    @role_required(Role.EMPLOYEE)
    def punch_out():
        data = json_body()
        location = optional_location(data.get("latitude"), data.get("longitude"))
        record = service.punch_out(int(session["user_id"]), location=location)
        return ok(message="Punched out successfully", attendance=record.to_dict())

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    @login_required
    def attendance_list():
        start = parse_optional_date(request.args.get("start"), "start")
        end = parse_optional_date(request.args.get("end"), "end")
        rows = service.get_attendance(current_caller(), start=start, end=end)
        return ok(attendance=rows)

    @app.route("/api/admin/employees/<int:employee_id>/punch-in", methods=["POST"], endpoint="admin_punch_in")
    @role_required(Role.ADMIN)
    def admin_punch_in(employee_id: int):
        data = json_body()
        location = optional_location(data.get("latitude"), data.get("longitude"))
        record = service.punch_in_for_employee(int(session["user_id"]), employee_id, location=location)
        return ok(201, message="Employee punched in successfully", attendance=record.to_dict())

    @app.route("/api/geocode/reverse", methods=["POST"], endpoint="reverse_geocode")
    @role_required(Role.EMPLOYEE)
    def reverse_geocode():
        data = json_body()
        if data.get("latitude") is None or data.get("longitude") is None:
            raise ValidationError("Latitude and longitude are required")
        address = service.resolve_address(require_location(data["latitude"], data["longitude"]))
        return ok(address=address)
