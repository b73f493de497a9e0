from __future__ import annotations

from dataclasses import dataclass, field

from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from .model import Caller
from .scopes.admin_scope import AdminScope
from .scopes.base import AccessScope
from .scopes.employee_scope import EmployeeScope
from .scopes.superadmin_scope import SuperAdminScope


def _default_registry() -> dict[Role, type[AccessScope]]:
    return {
        Role.EMPLOYEE: EmployeeScope,
        Role.ADMIN: AdminScope,
        Role.SUPERADMIN: SuperAdminScope,
    }


@dataclass
class AccessScopeFactory:
    """Factory Pattern: choose the read scope from the caller's role."""

    registry: dict[Role, type[AccessScope]] = field(default_factory=_default_registry)

    def for_caller(self, caller: Caller) -> AccessScope:
        scope_cls = self.registry.get(caller.role)
        if scope_cls is None:
            raise AuthorizationError("Unauthorized role")
        return scope_cls(caller.user_id)
