"""Role-aware dashboard endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query

from archconnect.auth.dependencies import get_current_user
from archconnect.models.dashboard import ArchitectDashboard, HomeownerDashboard
from archconnect.models.enums import UserRole
from archconnect.models.user import User
from archconnect.services.dashboards import get_architect_dashboard, get_homeowner_dashboard

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=ArchitectDashboard | HomeownerDashboard)
async def dashboard(
    followed_only: bool = Query(
        default=False,
        description="Homeowners only: restrict the feed to followed architects",
    ),
    user: User = Depends(get_current_user),
) -> ArchitectDashboard | HomeownerDashboard:
    """Return the dashboard matching the caller's role."""
    if user.role == UserRole.architect:
        return get_architect_dashboard(user)
    return get_homeowner_dashboard(user, followed_only=followed_only)
