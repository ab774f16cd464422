"""Pydantic models for the ``users`` table and profile payloads.

The database column ``contact_details`` is exposed as ``contact``;
``user_from_row`` performs the rename on read and ``ProfileUpdate.to_row``
on write.  ``is_following`` and ``is_hired`` are computed per viewer and
never stored.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from archconnect.models.enums import UserRole


class User(BaseModel):
    """Full user profile as returned to API clients."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str | None = None
    username: str
    role: UserRole
    avatar_url: str | None = None
    bio: str | None = None
    contact: str | None = None
    contact_email: str | None = None
    education: str | None = None
    experience: str | None = None
    skills: str | None = None
    social_links: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    # Derived per viewer
    is_following: bool | None = None
    is_hired: bool | None = None


class ProfileUpdate(BaseModel):
    """Payload for PUT /users/me/profile.

    Only fields explicitly sent by the client are written.
    """
    username: str | None = Field(default=None, min_length=1)
    bio: str | None = None
    contact: str | None = None
    avatar_url: str | None = None
    education: str | None = None
    experience: str | None = None
    skills: str | None = None
    contact_email: str | None = None
    social_links: str | None = None

    def to_row(self) -> dict[str, Any]:
        """Return the column updates, renaming ``contact`` to ``contact_details``."""
        row = self.model_dump(exclude_unset=True)
        if "contact" in row:
            row["contact_details"] = row.pop("contact")
        return row


class EnhancedProfileUpdate(BaseModel):
    """Payload for PUT /users/me/enhanced-profile."""
    education: str | None = None
    experience: str | None = None
    skills: str | None = None
    contact_email: str | None = None
    social_links: str | None = None

    def to_row(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class ProfileStats(BaseModel):
    """Follower / following / design counts for a profile."""
    followers_count: int = 0
    following_count: int = 0
    designs_count: int = 0
    is_following: bool | None = None
    is_hired: bool | None = None


def user_from_row(row: dict[str, Any]) -> User:
    """Reshape a ``users`` row into a ``User`` (``contact_details`` -> ``contact``)."""
    data = dict(row)
    data["contact"] = data.pop("contact_details", None)
    return User(**data)
