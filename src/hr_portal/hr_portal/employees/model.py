from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: an account as seen by the attendance core.

    Owned by the account service; read-only here.
    """

    employee_id: int
    owner_admin_id: Optional[int]
    full_name: Optional[str]
    email: str
    role: Role = Role.EMPLOYEE
    salary_rate: Optional[float] = None
    is_active: bool = True
    department: Optional[str] = None
    position: Optional[str] = None
    company: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "owner_admin_id": self.owner_admin_id,
            "name": self.full_name,
            "email": self.email,
            "department": self.department,
            "position": self.position,
            "company": self.company,
            "salary_rate": self.salary_rate,
        }
