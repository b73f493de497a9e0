from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import ContextManager, Iterator, Protocol


class EmployeeLock(Protocol):
    """Per-employee critical section around check-then-act sequences."""

    def hold(self, employee_id: int) -> ContextManager[None]:
        raise NotImplementedError


class InProcessEmployeeLock(EmployeeLock):
    """Lock registry for a single process (one lock per employee id).

    Does not coordinate across worker processes; use the MySQL advisory lock
    for multi-process deployments.
    """

    def __init__(self, *, timeout_seconds: float = 10.0):
        self._timeout = float(timeout_seconds)
        self._guard = threading.Lock()
        self._locks: dict[int, threading.Lock] = {}

    def _lock_for(self, employee_id: int) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(employee_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[employee_id] = lock
            return lock

    @contextmanager
    def hold(self, employee_id: int) -> Iterator[None]:
        lock = self._lock_for(int(employee_id))
        if not lock.acquire(timeout=self._timeout):
            raise TimeoutError(f"Timed out waiting for lock on employee {employee_id}")
        try:
            yield
        finally:
            lock.release()
