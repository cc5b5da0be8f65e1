from __future__ import annotations

from dataclasses import dataclass

from .enums import Role
from .exceptions import AuthorizationError


@dataclass(frozen=True)
class Actor:
    """Request-scoped identity of the caller.

    Built by the HTTP layer from the authenticated session and passed
    explicitly into every service call.
    """

    user_id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def require_admin(self, message: str = "Only admins can perform this action") -> None:
        if not self.is_admin:
            raise AuthorizationError(message)
