from __future__ import annotations

from flask import Flask, session

from ..common.datetime_utils import parse_optional_date
from ..common.web import current_caller, json_body, login_required, ok, role_required
from ..core.enums import Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.leave_service

    @app.route("/api/leaves", methods=["POST"], endpoint="request_leave")
    @role_required(Role.EMPLOYEE)
    def request_leave():
        data = json_body()
        leave = service.request_leave_for_employee(
            int(session["user_id"]),
            parse_optional_date(data.get("start_date"), "start_date"),
            parse_optional_date(data.get("end_date"), "end_date"),
            data.get("reason"),
            data.get("leave_type"),
        )
        return ok(201, message="Leave request submitted", leave=leave.to_dict())

    @app.route("/api/leaves", methods=["GET"], endpoint="list_leaves")
    @login_required
    def list_leaves():
        leaves = service.list_leaves(current_caller())
        return ok(leaves=[leave.to_dict() for leave in leaves])

    @app.route("/api/admin/leaves/<int:leave_id>/status", methods=["PUT"], endpoint="update_leave_status")
    @role_required(Role.ADMIN)
    def update_leave_status(leave_id: int):
        data = json_body()
        leave = service.update_status(leave_id, int(session["user_id"]), data.get("status"))
        return ok(message=f"Leave {leave.status.value}", leave=leave.to_dict())
