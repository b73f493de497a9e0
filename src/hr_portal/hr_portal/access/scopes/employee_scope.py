from __future__ import annotations

from typing import Optional, Sequence

from ...employees.repository import EmployeeRepository
from .base import AccessScope


class EmployeeScope(AccessScope):
    """An employee sees only their own data."""

    def employee_ids(self, employees: EmployeeRepository) -> Optional[Sequence[int]]:
        return [self.user_id]
