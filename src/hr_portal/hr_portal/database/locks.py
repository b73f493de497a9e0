from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from ..common.locking import EmployeeLock
from .connection import DatabaseConnection


class MySQLAdvisoryLock(EmployeeLock):
    """Per-employee serialization using MySQL named locks.

    ``GET_LOCK`` is held by the connection opened here for the duration of the
    block; other processes asking for the same name wait up to the timeout.
    """

    def __init__(self, conn_factory: DatabaseConnection, *, timeout_seconds: float = 10.0, prefix: str = "hr_portal.employee"):
        self._conn_factory = conn_factory
        self._timeout = float(timeout_seconds)
        self._prefix = prefix

    def _name(self, employee_id: int) -> str:
        return f"{self._prefix}.{int(employee_id)}"

    @contextmanager
    def hold(self, employee_id: int) -> Iterator[None]:
        name = self._name(employee_id)
        conn = self._conn_factory.connect()
        try:
            cur = conn.cursor()
            try:
                cur.execute("SELECT GET_LOCK(%s, %s)", (name, self._timeout))
                row = cur.fetchone()
                if not row or row[0] != 1:
                    raise TimeoutError(f"Timed out waiting for lock {name}")
                try:
                    yield
                finally:
                    cur.execute("SELECT RELEASE_LOCK(%s)", (name,))
                    cur.fetchone()
            finally:
                cur.close()
        finally:
            conn.close()
