from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..common.geo import GeoPoint
from ..core.enums import PunchKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, is_duplicate_key
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, employee_id,
    punch_in_time, punch_in_latitude, punch_in_longitude, punch_in_address,
    punch_out_time, punch_out_latitude, punch_out_longitude, punch_out_address,
    created_at
"""

_ADDRESS_COLUMN = {
    PunchKind.PUNCH_IN: "punch_in_address",
    PunchKind.PUNCH_OUT: "punch_out_address",
}


def _point(lat: Any, lon: Any) -> Optional[GeoPoint]:
    if lat is None or lon is None:
        return None
    return GeoPoint(latitude=float(lat), longitude=float(lon))


def _to_record(r: dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        punch_in_time=r["punch_in_time"],
        punch_in_location=_point(r.get("punch_in_latitude"), r.get("punch_in_longitude")),
        punch_in_address=r.get("punch_in_address"),
        punch_out_time=r.get("punch_out_time"),
        punch_out_location=_point(r.get("punch_out_latitude"), r.get("punch_out_longitude")),
        punch_out_address=r.get("punch_out_address"),
        created_at=r.get("created_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def find_punch_in_between(self, employee_id: int, start: datetime, end: datetime) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND punch_in_time >= %s AND punch_in_time < %s
                LIMIT 1
                """,
                (int(employee_id), start, end),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def find_punch_out_between(self, employee_id: int, start: datetime, end: datetime) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND punch_out_time >= %s AND punch_out_time < %s
                LIMIT 1
                """,
                (int(employee_id), start, end),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_latest_open(self, employee_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND punch_out_time IS NULL
                ORDER BY punch_in_time DESC
                LIMIT 1
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create_punch_in(
        self,
        *,
        employee_id: int,
        punch_in_time: datetime,
        location: Optional[GeoPoint] = None,
    ) -> Optional[AttendanceRecord]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(employee_id, punch_in_time, punch_in_latitude, punch_in_longitude)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (
                        int(employee_id),
                        punch_in_time,
                        location.latitude if location else None,
                        location.longitude if location else None,
                    ),
                )
                attendance_id = int(cur.lastrowid)
        except IntegrityError as e:
            # uq_attendance_employee_day: another punch-in landed first
            if is_duplicate_key(e):
                return None
            raise

        return AttendanceRecord(
            attendance_id=attendance_id,
            employee_id=int(employee_id),
            punch_in_time=punch_in_time,
            punch_in_location=location,
        )

    def close_session(
        self,
        *,
        attendance_id: int,
        punch_out_time: datetime,
        location: Optional[GeoPoint] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET punch_out_time=%s, punch_out_latitude=%s, punch_out_longitude=%s
                WHERE attendance_id=%s AND punch_out_time IS NULL
                """,
                (
                    punch_out_time,
                    location.latitude if location else None,
                    location.longitude if location else None,
                    int(attendance_id),
                ),
            )
            return cur.rowcount > 0

    def set_address(self, *, attendance_id: int, kind: PunchKind, address: str) -> bool:
        column = _ADDRESS_COLUMN[kind]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE attendance_records SET {column}=%s WHERE attendance_id=%s",
                (address, int(attendance_id)),
            )
            return cur.rowcount > 0

    def list_for_employees(
        self,
        *,
        employee_ids: Optional[Sequence[int]],
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        ascending: bool = False,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["1=1"]
        params: list[object] = []

        if employee_ids is not None:
            if not employee_ids:
                return []
            clauses.append(f"employee_id IN ({in_clause(employee_ids)})")
            params.extend(int(i) for i in employee_ids)
        if start is not None:
            clauses.append("punch_in_time >= %s")
            params.append(start)
        if end is not None:
            clauses.append("punch_in_time <= %s")
            params.append(end)

        where = " AND ".join(clauses)
        order = "ASC" if ascending else "DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {where}
                ORDER BY punch_in_time {order}, attendance_id {order}
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]
