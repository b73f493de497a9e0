from __future__ import annotations

from datetime import date
from typing import Any, Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import LeaveRequest
from .repository import LeaveRepository

_COLUMNS = """
    leave_id, employee_id, admin_id, leave_type,
    start_date, end_date, reason, status, created_at
"""


def _to_leave(r: dict[str, Any]) -> LeaveRequest:
    return LeaveRequest(
        leave_id=int(r["leave_id"]),
        employee_id=int(r["employee_id"]),
        owner_admin_id=int(r["admin_id"]),
        leave_type=LeaveType(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r["reason"],
        status=LeaveStatus(r["status"]),
        created_at=r.get("created_at"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        employee_id: int,
        owner_admin_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: str,
    ) -> LeaveRequest:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(employee_id, admin_id, leave_type, start_date, end_date, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    int(owner_admin_id),
                    leave_type.value,
                    start_date,
                    end_date,
                    reason,
                    LeaveStatus.PENDING.value,
                ),
            )
            leave_id = int(cur.lastrowid)

        created = self.get_by_id(leave_id)
        if created is None:
            raise RuntimeError(f"Leave request {leave_id} vanished after insert")
        return created

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests WHERE leave_id=%s", (int(leave_id),))
            r = fetchone(cur)
            return _to_leave(r) if r else None

    def find_overlapping(self, employee_id: int, start_date: date, end_date: date) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE employee_id=%s AND start_date <= %s AND end_date >= %s
                ORDER BY start_date
                LIMIT 1
                """,
                (int(employee_id), end_date, start_date),
            )
            r = fetchone(cur)
            return _to_leave(r) if r else None

    def set_status(self, leave_id: int, status: LeaveStatus) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE leave_requests SET status=%s WHERE leave_id=%s",
                (status.value, int(leave_id)),
            )

    def list_for_employees(self, *, employee_ids: Optional[Sequence[int]]) -> Sequence[LeaveRequest]:
        clauses = ["1=1"]
        params: list[object] = []

        if employee_ids is not None:
            if not employee_ids:
                return []
            clauses.append(f"employee_id IN ({in_clause(employee_ids)})")
            params.extend(int(i) for i in employee_ids)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE {where}
                ORDER BY created_at DESC, leave_id DESC
                """,
                tuple(params),
            )
            return [_to_leave(r) for r in fetchall(cur)]
