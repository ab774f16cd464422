"""FastAPI authentication dependencies.

Usage::

    @router.get("/protected")
    async def protected(user: User = Depends(get_current_user)):
        return {"user_id": user.id}

    @router.post("/architect-only")
    async def architect_only(user: User = Depends(require_role(UserRole.architect))):
        ...
"""

from __future__ import annotations

from collections.abc import Callable

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from archconnect.core.exceptions import AuthenticationError, ForbiddenError
from archconnect.models.enums import UserRole
from archconnect.models.user import User
from archconnect.services.auth import get_user_for_token

# auto_error=False so a missing header surfaces as our own 401 payload
security = HTTPBearer(auto_error=False)


async def get_access_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str:
    """Extract the bearer token from the Authorization header."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()
    return credentials.credentials


async def get_current_user(access_token: str = Depends(get_access_token)) -> User:
    """Resolve the bearer token to the caller's ``users`` profile."""
    return get_user_for_token(access_token)


def require_role(role: UserRole) -> Callable[..., User]:
    """Dependency factory restricting an endpoint to one marketplace role."""

    async def _require_role(user: User = Depends(get_current_user)) -> User:
        if user.role != role:
            raise ForbiddenError(f"Only {role.value}s can perform this action")
        return user

    return _require_role
