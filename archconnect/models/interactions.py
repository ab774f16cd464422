"""Pydantic models for the join tables.

``follows``, ``likes``, ``saved_posts`` and ``hired_architects`` carry no
business rules: the existence of a row is the relationship.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from archconnect.models.post import Post
from archconnect.models.user import User


class Follower(BaseModel):
    """A ``follows`` row seen from the followed user (embeds ``follower``)."""
    id: UUID
    follower_id: UUID
    following_id: UUID
    created_at: datetime | None = None
    follower: User | None = None


class Following(BaseModel):
    """A ``follows`` row seen from the follower (embeds ``following``)."""
    id: UUID
    follower_id: UUID
    following_id: UUID
    created_at: datetime | None = None
    following: User | None = None


class Like(BaseModel):
    id: UUID
    user_id: UUID
    post_id: UUID
    created_at: datetime | None = None


class SavedPost(BaseModel):
    """A ``saved_posts`` row with the embedded post and its owner."""
    id: UUID
    user_id: UUID
    post_id: UUID
    created_at: datetime | None = None
    post: Post | None = None


class HiredArchitect(BaseModel):
    """A ``hired_architects`` row with the embedded architect."""
    id: UUID
    homeowner_id: UUID
    architect_id: UUID
    created_at: datetime | None = None
    architect: User | None = None


# --- Toggle payloads ---

class FollowToggle(BaseModel):
    """Body of POST /users/{id}/follow: the state the client currently shows."""
    is_following: bool


class LikeToggle(BaseModel):
    is_liked: bool


class SaveToggle(BaseModel):
    is_saved: bool


class FollowState(BaseModel):
    """Resulting follow relationship after a toggle."""
    user_id: UUID
    is_following: bool


class PostInteractionState(BaseModel):
    """Resulting like / save relationship after a toggle."""
    post_id: UUID
    is_liked: bool | None = None
    is_saved: bool | None = None


class HireState(BaseModel):
    """Resulting hire relationship, with the now-visible architect."""
    architect_id: UUID
    is_hired: bool = True
    architect: User | None = None
