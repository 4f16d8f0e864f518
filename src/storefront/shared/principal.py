"""Caller identity as supplied by the upstream auth layer.

The gateway in front of this service authenticates the request and forwards
the principal in ``X-User-*`` headers. Nothing here issues or verifies
credentials.
"""

from dataclasses import dataclass

from fastapi import Depends, Header

from storefront.shared.exceptions import ForbiddenError, NotAuthenticatedError
from storefront.utils.logging import bind_request_context

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class Principal:
    id: str
    role: str = "user"
    email: str | None = None
    name: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


def get_principal(
    x_user_id: str | None = Header(default=None),
    x_user_role: str = Header(default="user"),
    x_user_email: str | None = Header(default=None),
    x_user_name: str | None = Header(default=None),
) -> Principal:
    if not x_user_id:
        raise NotAuthenticatedError({"auth": ["Please login to access this resource"]})

    bind_request_context(user_id=x_user_id, role=x_user_role)
    return Principal(id=x_user_id, role=x_user_role, email=x_user_email, name=x_user_name)


def require_admin(principal: Principal = Depends(get_principal)) -> Principal:
    if not principal.is_admin:
        raise ForbiddenError({"auth": [f"Role ({principal.role}) is not allowed to access this resource"]})
    return principal
