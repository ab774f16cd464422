"""Profile, follow and personal-collection endpoints."""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from archconnect.auth.dependencies import get_current_user, require_role
from archconnect.models.enums import UserRole
from archconnect.models.interactions import (
    Follower,
    Following,
    FollowState,
    FollowToggle,
    HiredArchitect,
    SavedPost,
)
from archconnect.models.user import EnhancedProfileUpdate, ProfileStats, ProfileUpdate, User
from archconnect.services.interactions import (
    get_followers,
    get_following,
    get_hired_architects,
    get_saved_posts,
    toggle_follow,
)
from archconnect.services.profiles import (
    get_profile_stats,
    get_user_by_id,
    update_enhanced_profile,
    update_profile,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Current user
# ---------------------------------------------------------------------------

@router.put("/me/profile", response_model=User)
async def update_my_profile(
    body: ProfileUpdate,
    user: User = Depends(get_current_user),
) -> User:
    """Update username, bio, contact and any enhanced fields sent."""
    return update_profile(user.id, body)


@router.put("/me/enhanced-profile", response_model=User)
async def update_my_enhanced_profile(
    body: EnhancedProfileUpdate,
    user: User = Depends(get_current_user),
) -> User:
    """Update education, experience, skills, contact email and social links."""
    return update_enhanced_profile(user.id, body)


@router.get("/me/saved-posts", response_model=list[SavedPost])
async def my_saved_posts(user: User = Depends(get_current_user)) -> list[SavedPost]:
    return get_saved_posts(user.id)


@router.get("/me/hired-architects", response_model=list[HiredArchitect])
async def my_hired_architects(
    user: User = Depends(require_role(UserRole.homeowner)),
) -> list[HiredArchitect]:
    return get_hired_architects(user.id)


# ---------------------------------------------------------------------------
# Other users
# ---------------------------------------------------------------------------

@router.get("/{user_id}", response_model=User)
async def user_profile(user_id: UUID, user: User = Depends(get_current_user)) -> User:
    """Return a profile; contact details only when the caller may see them."""
    return get_user_by_id(user_id, viewer_id=user.id)


@router.get("/{user_id}/stats", response_model=ProfileStats)
async def user_stats(user_id: UUID, user: User = Depends(get_current_user)) -> ProfileStats:
    return get_profile_stats(user_id, viewer_id=user.id)


@router.get("/{user_id}/followers", response_model=list[Follower])
async def user_followers(
    user_id: UUID,
    user: User = Depends(get_current_user),
) -> list[Follower]:
    return get_followers(user_id, viewer_id=user.id)


@router.get("/{user_id}/following", response_model=list[Following])
async def user_following(
    user_id: UUID,
    user: User = Depends(get_current_user),
) -> list[Following]:
    return get_following(user_id, viewer_id=user.id)


@router.post("/{user_id}/follow", response_model=FollowState)
async def follow_user(
    user_id: UUID,
    body: FollowToggle,
    user: User = Depends(get_current_user),
) -> FollowState:
    """Toggle following *user_id* from the state the client currently shows."""
    new_state = toggle_follow(user.id, user_id, body.is_following)
    return FollowState(user_id=user_id, is_following=new_state)
