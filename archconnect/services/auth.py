"""Authentication service backed by Supabase Auth.

Sign-up, sign-in and sign-out are delegated to the auth service; this module
only marshals parameters, maps failures to ``AuthenticationError`` and makes
sure every authenticated user has a row in ``users``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from archconnect.core.constants import (
    DASHBOARD_PATHS,
    DEFAULT_ROLE,
    DEFAULT_USERNAME,
    LOGIN_PATH,
    USERS_TABLE,
)
from archconnect.core.exceptions import AuthenticationError, DataAccessError
from archconnect.db.supabase import execute, get_supabase, new_auth_client
from archconnect.models.auth import SignInResponse, SignUpResponse
from archconnect.models.enums import UserRole
from archconnect.models.user import User, user_from_row

logger = logging.getLogger(__name__)


def dashboard_path_for(role: UserRole | str | None) -> str:
    """Where a user lands after signing in: their role's dashboard."""
    value = role.value if isinstance(role, UserRole) else role
    return DASHBOARD_PATHS.get(value or "", LOGIN_PATH)


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------

def sign_up(email: str, password: str, username: str, role: UserRole) -> SignUpResponse:
    """Register a new account.

    ``username`` and ``role`` travel as user metadata; a database trigger
    creates the matching ``users`` row.
    """
    try:
        response = new_auth_client().auth.sign_up({
            "email": email,
            "password": password,
            "options": {"data": {"username": username, "role": role.value}},
        })
    except Exception as exc:
        logger.warning("sign_up_failed", extra={"error_message": str(exc)})
        raise AuthenticationError(
            str(exc) or "An error occurred during registration"
        ) from exc

    user_id = response.user.id if response.user else None
    logger.info("user_registered", extra={"user_id": str(user_id), "role": role.value})
    return SignUpResponse(user_id=user_id, session_issued=response.session is not None)


def sign_in(email: str, password: str) -> SignInResponse:
    """Password sign-in returning tokens, profile and the role redirect."""
    try:
        response = new_auth_client().auth.sign_in_with_password({
            "email": email,
            "password": password,
        })
    except Exception as exc:
        logger.warning("sign_in_failed", extra={"error_message": str(exc)})
        raise AuthenticationError(str(exc) or "An error occurred during login") from exc

    if response.session is None or response.user is None:
        raise AuthenticationError("An error occurred during login")

    user = load_profile(response.user)
    session = response.session
    expires_at = (
        datetime.fromtimestamp(session.expires_at, tz=timezone.utc)
        if session.expires_at
        else None
    )
    logger.info("user_signed_in", extra={"user_id": str(user.id), "role": user.role.value})
    return SignInResponse(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_at=expires_at,
        user=user,
        redirect_to=dashboard_path_for(user.role),
    )


def sign_out(access_token: str) -> None:
    """Revoke the session identified by *access_token*."""
    try:
        get_supabase().auth.admin.sign_out(access_token)
    except Exception as exc:
        logger.warning("sign_out_failed", extra={"error_message": str(exc)})
        raise AuthenticationError(str(exc) or "An error occurred during logout") from exc


# ---------------------------------------------------------------------------
# Current user
# ---------------------------------------------------------------------------

def _default_profile(auth_user: Any) -> dict[str, Any]:
    metadata: dict[str, Any] = getattr(auth_user, "user_metadata", None) or {}
    email = getattr(auth_user, "email", None) or ""

    username = metadata.get("username") or email.split("@")[0] or DEFAULT_USERNAME
    role = metadata.get("role")
    if role not in {r.value for r in UserRole}:
        role = DEFAULT_ROLE

    now = datetime.now(timezone.utc).isoformat()
    return {
        "id": str(auth_user.id),
        "email": email,
        "username": username,
        "role": role,
        "created_at": now,
        "updated_at": now,
        "avatar_url": None,
        "bio": None,
        "contact_details": None,
    }


def load_profile(auth_user: Any) -> User:
    """Return the ``users`` row of an authenticated user, creating it if absent.

    When the default row cannot be inserted the unsaved default profile is
    returned so the session stays usable.
    """
    result = execute(
        get_supabase()
        .table(USERS_TABLE)
        .select("*")
        .eq("id", str(auth_user.id))
        .limit(1),
        "load profile",
    )
    if result.data:
        return user_from_row(result.data[0])

    default = _default_profile(auth_user)
    try:
        inserted = execute(
            get_supabase().table(USERS_TABLE).insert(default),
            "create profile",
        )
    except DataAccessError:
        logger.warning("default_profile_not_saved", extra={"user_id": default["id"]})
        return user_from_row(default)

    logger.info("default_profile_created", extra={"user_id": default["id"]})
    return user_from_row(inserted.data[0] if inserted.data else default)


def get_user_for_token(access_token: str) -> User:
    """Resolve a bearer token to the caller's profile.

    Raises ``AuthenticationError`` when the token is rejected.
    """
    try:
        response = get_supabase().auth.get_user(access_token)
    except Exception as exc:
        logger.info("token_rejected", extra={"error_message": str(exc)})
        raise AuthenticationError("Invalid or expired session") from exc

    if response is None or response.user is None:
        raise AuthenticationError("Invalid or expired session")

    return load_profile(response.user)
