"""Pydantic models for the ``posts`` table."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from archconnect.models.user import User, user_from_row


class Post(BaseModel):
    """Design post with its embedded owner and per-viewer flags."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str | None = None
    image_url: str
    user_id: UUID
    design_type: str | None = None
    tags: list[str] = []
    hire_me: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    user: User | None = None

    # Derived per viewer
    likes_count: int | None = None
    is_liked: bool | None = None
    is_saved: bool | None = None


class HireStatusUpdate(BaseModel):
    """Payload for POST /posts/{id}/hire-status."""
    current_status: bool


def post_from_row(row: dict[str, Any]) -> Post:
    """Reshape a ``posts`` row, including an embedded ``user`` when present."""
    data = dict(row)
    owner = data.pop("user", None)
    if data.get("tags") is None:
        data["tags"] = []
    if data.get("hire_me") is None:
        data["hire_me"] = False
    return Post(**data, user=user_from_row(owner) if owner else None)
