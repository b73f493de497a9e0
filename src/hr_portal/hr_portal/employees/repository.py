from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Read access to accounts.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_for_admin(self, employee_id: int, admin_id: int) -> Optional[Employee]:
        """Employee with role=employee owned by ``admin_id``, else None."""

        raise NotImplementedError

    def list_ids_for_admin(self, admin_id: int) -> Sequence[int]:
        raise NotImplementedError
