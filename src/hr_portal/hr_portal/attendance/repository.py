from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..common.geo import GeoPoint
from ..core.enums import PunchKind
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def find_punch_in_between(self, employee_id: int, start: datetime, end: datetime) -> Optional[AttendanceRecord]:
        """Any record whose punch-in lies in ``[start, end)``."""

        raise NotImplementedError

    def find_punch_out_between(self, employee_id: int, start: datetime, end: datetime) -> Optional[AttendanceRecord]:
        """Any record whose punch-out lies in ``[start, end)``."""

        raise NotImplementedError

    def get_latest_open(self, employee_id: int) -> Optional[AttendanceRecord]:
        """Open session with the latest punch-in, if any."""

        raise NotImplementedError

    def create_punch_in(
        self,
        *,
        employee_id: int,
        punch_in_time: datetime,
        location: Optional[GeoPoint] = None,
    ) -> Optional[AttendanceRecord]:
        """Insert a new session; None when the store rejects a second punch-in that day."""

        raise NotImplementedError

    def close_session(
        self,
        *,
        attendance_id: int,
        punch_out_time: datetime,
        location: Optional[GeoPoint] = None,
    ) -> bool:
        """Set punch-out only while it is still null."""

        raise NotImplementedError

    def set_address(self, *, attendance_id: int, kind: PunchKind, address: str) -> bool:
        raise NotImplementedError

    def list_for_employees(
        self,
        *,
        employee_ids: Optional[Sequence[int]],
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        ascending: bool = False,
    ) -> Sequence[AttendanceRecord]:
        """Records ordered by punch-in; ``employee_ids=None`` means every employee.

        ``start``/``end`` bound punch-in inclusively.
        """

        raise NotImplementedError
