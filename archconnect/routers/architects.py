"""Architect directory, portfolio and hiring endpoints."""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends

from archconnect.auth.dependencies import get_current_user, require_role
from archconnect.models.enums import UserRole
from archconnect.models.interactions import HireState
from archconnect.models.user import User
from archconnect.services.interactions import hire_architect
from archconnect.services.profiles import get_architect_portfolio, get_architects

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[User])
async def list_architects(user: User = Depends(get_current_user)) -> list[User]:
    """All architects, flagged with the caller's follow / hire state."""
    return get_architects(viewer_id=user.id)


@router.get("/{architect_id}/portfolio")
async def architect_portfolio(
    architect_id: UUID,
    user: User = Depends(get_current_user),
) -> dict[str, Any]:
    """The architect's profile and designs, newest first."""
    return get_architect_portfolio(architect_id, viewer_id=user.id)


@router.post("/{architect_id}/hire", response_model=HireState, status_code=201)
async def hire(
    architect_id: UUID,
    user: User = Depends(require_role(UserRole.homeowner)),
) -> HireState:
    """Hire an architect; their contact details become visible to the caller."""
    return hire_architect(user.id, architect_id)
