"""Design post endpoints: feed, publication, likes, saves and availability."""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from archconnect.auth.dependencies import get_current_user, require_role
from archconnect.models.enums import UserRole
from archconnect.models.interactions import LikeToggle, PostInteractionState, SaveToggle
from archconnect.models.post import HireStatusUpdate, Post
from archconnect.models.user import User
from archconnect.services.interactions import toggle_like, toggle_save
from archconnect.services.posts import (
    create_post,
    get_feed,
    get_post_with_status,
    toggle_hire_status,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _parse_tags(raw: str | None) -> list[str]:
    """Split a comma-separated form field into trimmed, non-empty tags."""
    if not raw:
        return []
    return [t.strip() for t in raw.split(",") if t.strip()]


@router.get("", response_model=list[Post])
async def feed(
    followed_only: bool = Query(
        default=False,
        description="Only posts from users the caller follows",
    ),
    user: User = Depends(get_current_user),
) -> list[Post]:
    """Newest-first feed flagged with the caller's like / save state."""
    return get_feed(user.id, followed_only=followed_only)


@router.post("", response_model=Post, status_code=201)
async def publish_post(
    title: str = Form(...),
    image: UploadFile = File(...),
    description: str | None = Form(default=None),
    design_type: str | None = Form(default=None),
    tags: str | None = Form(default=None, description="Comma-separated tags"),
    hire_me: bool = Form(default=False),
    user: User = Depends(require_role(UserRole.architect)),
) -> Post:
    """Upload a design image and publish it to the caller's portfolio."""
    content = await image.read()
    return create_post(
        user.id,
        title=title,
        image=content,
        filename=image.filename,
        content_type=image.content_type,
        description=description,
        design_type=design_type,
        tags=_parse_tags(tags),
        hire_me=hire_me,
    )


@router.get("/{post_id}", response_model=Post)
async def post_detail(post_id: UUID, user: User = Depends(get_current_user)) -> Post:
    return get_post_with_status(post_id, user.id)


@router.post("/{post_id}/like", response_model=PostInteractionState)
async def like_post(
    post_id: UUID,
    body: LikeToggle,
    user: User = Depends(get_current_user),
) -> PostInteractionState:
    """Toggle the caller's like from the state the client currently shows."""
    return PostInteractionState(
        post_id=post_id,
        is_liked=toggle_like(user.id, post_id, body.is_liked),
    )


@router.post("/{post_id}/save", response_model=PostInteractionState)
async def save_post(
    post_id: UUID,
    body: SaveToggle,
    user: User = Depends(get_current_user),
) -> PostInteractionState:
    """Toggle the caller's save from the state the client currently shows."""
    return PostInteractionState(
        post_id=post_id,
        is_saved=toggle_save(user.id, post_id, body.is_saved),
    )


@router.post("/{post_id}/hire-status", response_model=Post)
async def post_hire_status(
    post_id: UUID,
    body: HireStatusUpdate,
    user: User = Depends(require_role(UserRole.architect)),
) -> Post:
    """Flip the "available for hire" flag on one of the caller's designs."""
    return toggle_hire_status(post_id, user.id, body.current_status)
