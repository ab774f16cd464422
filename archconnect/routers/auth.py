"""Authentication endpoints.

Sign-up and sign-in are public; every other endpoint of the API expects the
returned access token as ``Authorization: Bearer <token>``.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends

from archconnect.auth.dependencies import get_access_token, get_current_user
from archconnect.models.auth import (
    CurrentUserResponse,
    SignInRequest,
    SignInResponse,
    SignUpRequest,
    SignUpResponse,
)
from archconnect.models.user import User
from archconnect.services.auth import dashboard_path_for, sign_in, sign_out, sign_up

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/sign-up", response_model=SignUpResponse, status_code=201)
async def register(body: SignUpRequest) -> SignUpResponse:
    """Create an account with the chosen marketplace role."""
    return sign_up(body.email, body.password, body.username, body.role)


@router.post("/sign-in", response_model=SignInResponse)
async def login(body: SignInRequest) -> SignInResponse:
    """Sign in and receive tokens plus the role dashboard to redirect to."""
    return sign_in(body.email, body.password)


@router.post("/sign-out")
async def logout(access_token: str = Depends(get_access_token)) -> dict[str, Any]:
    """Revoke the current session."""
    sign_out(access_token)
    return {"message": "You have been successfully logged out", "redirect_to": "/login"}


@router.get("/me", response_model=CurrentUserResponse)
async def me(user: User = Depends(get_current_user)) -> CurrentUserResponse:
    """Return the caller's profile and role dashboard path."""
    return CurrentUserResponse(user=user, redirect_to=dashboard_path_for(user.role))
