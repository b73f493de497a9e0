from __future__ import annotations

from flask import Flask, request, session

from ..common.datetime_utils import parse_optional_date
from ..common.web import ok, role_required
from ..core.enums import Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route(
        "/api/admin/employees/<int:employee_id>/salary-slip",
        methods=["GET"],
        endpoint="salary_slip",
    )
    @role_required(Role.ADMIN)
    def salary_slip(employee_id: int):
        slip = container.payroll_service.compute_salary_slip(
            employee_id,
            int(session["user_id"]),
            parse_optional_date(request.args.get("from"), "from"),
            parse_optional_date(request.args.get("to"), "to"),
        )
        return ok(slip=slip.to_dict())
