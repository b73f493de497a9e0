from __future__ import annotations

from typing import Optional, Sequence

from ...employees.repository import EmployeeRepository
from .base import AccessScope


class SuperAdminScope(AccessScope):
    def employee_ids(self, employees: EmployeeRepository) -> Optional[Sequence[int]]:
        return None
