from __future__ import annotations

from typing import Optional, Sequence

from ...employees.repository import EmployeeRepository
from .base import AccessScope


class AdminScope(AccessScope):
    """An admin sees every employee they own."""

    def employee_ids(self, employees: EmployeeRepository) -> Optional[Sequence[int]]:
        return list(employees.list_ids_for_admin(self.user_id))
