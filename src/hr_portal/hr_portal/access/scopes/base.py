from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ...employees.repository import EmployeeRepository


class AccessScope(ABC):
    """Strategy Pattern: which employees' data a caller may read."""

    def __init__(self, user_id: int):
        self.user_id = int(user_id)

    @abstractmethod
    def employee_ids(self, employees: EmployeeRepository) -> Optional[Sequence[int]]:
        """Visible employee ids; None means unrestricted."""

        raise NotImplementedError
