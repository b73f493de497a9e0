from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class Caller:
    """Authenticated identity forwarded by the auth layer."""

    user_id: int
    role: Role
