from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = """
    user_id, admin_id, full_name, email, role, salary, is_active,
    department, position, company
"""


def _to_employee(r: dict[str, Any]) -> Employee:
    salary = r.get("salary")
    return Employee(
        employee_id=int(r["user_id"]),
        owner_admin_id=int(r["admin_id"]) if r.get("admin_id") is not None else None,
        full_name=r.get("full_name"),
        email=r["email"],
        role=Role(r["role"]),
        salary_rate=float(salary) if salary is not None else None,
        is_active=bool(r.get("is_active", True)),
        department=r.get("department"),
        position=r.get("position"),
        company=r.get("company"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (int(employee_id),))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def get_for_admin(self, employee_id: int, admin_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM users
                WHERE user_id=%s AND admin_id=%s AND role=%s
                """,
                (int(employee_id), int(admin_id), Role.EMPLOYEE.value),
            )
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def list_ids_for_admin(self, admin_id: int) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT user_id FROM users WHERE admin_id=%s AND role=%s ORDER BY user_id",
                (int(admin_id), Role.EMPLOYEE.value),
            )
            return [int(r["user_id"]) for r in fetchall(cur)]
