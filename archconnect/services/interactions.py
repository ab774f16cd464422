"""Follow, like, save and hire interactions.

Every toggle branches on the state the caller currently shows: when the
relationship is set it is deleted by composite key, otherwise it is created.
Creation is an upsert on the composite key that ignores duplicates and
deletion matches zero or more rows, so repeated or concurrent requests
converge on the requested state instead of failing on the unique constraint
or leaving duplicate rows.
"""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from archconnect.core.constants import (
    FOLLOWER_SELECT,
    FOLLOWING_SELECT,
    FOLLOWS_CONFLICT_KEY,
    FOLLOWS_TABLE,
    HIRED_ARCHITECT_SELECT,
    HIRED_ARCHITECTS_CONFLICT_KEY,
    HIRED_ARCHITECTS_TABLE,
    LIKES_CONFLICT_KEY,
    LIKES_TABLE,
    SAVED_POST_SELECT,
    SAVED_POSTS_CONFLICT_KEY,
    SAVED_POSTS_TABLE,
)
from archconnect.core.exceptions import ValidationError
from archconnect.db.supabase import execute, get_supabase
from archconnect.models.interactions import (
    Follower,
    Following,
    HiredArchitect,
    HireState,
    SavedPost,
)
from archconnect.models.post import post_from_row
from archconnect.models.user import user_from_row
from archconnect.services.profiles import (
    apply_contact_visibility,
    apply_post_owner_visibility,
    get_architect,
    get_hire_links,
)

logger = logging.getLogger(__name__)

IdLike = str | UUID


# ---------------------------------------------------------------------------
# Relationship primitives
# ---------------------------------------------------------------------------

def _set_relationship(
    table: str,
    conflict_key: str,
    keys: dict[str, str],
    present: bool,
    action: str,
) -> None:
    """Make the row identified by *keys* exist (``present``) or not."""
    client = get_supabase()
    if present:
        query = client.table(table).upsert(
            keys,
            on_conflict=conflict_key,
            ignore_duplicates=True,
        )
    else:
        query = client.table(table).delete()
        for column, value in keys.items():
            query = query.eq(column, value)
    execute(query, action)


# ---------------------------------------------------------------------------
# Toggles
# ---------------------------------------------------------------------------

def toggle_follow(follower_id: IdLike, following_id: IdLike, is_following: bool) -> bool:
    """Unfollow when *is_following*, follow otherwise.  Returns the new state."""
    if str(follower_id) == str(following_id):
        raise ValidationError("You cannot follow yourself")

    new_state = not is_following
    _set_relationship(
        FOLLOWS_TABLE,
        FOLLOWS_CONFLICT_KEY,
        {"follower_id": str(follower_id), "following_id": str(following_id)},
        new_state,
        "update follow status",
    )
    logger.info(
        "follow_toggled",
        extra={
            "follower_id": str(follower_id),
            "following_id": str(following_id),
            "is_following": new_state,
        },
    )
    return new_state


def toggle_like(user_id: IdLike, post_id: IdLike, is_liked: bool) -> bool:
    """Unlike when *is_liked*, like otherwise.  Returns the new state."""
    new_state = not is_liked
    _set_relationship(
        LIKES_TABLE,
        LIKES_CONFLICT_KEY,
        {"user_id": str(user_id), "post_id": str(post_id)},
        new_state,
        "update like status",
    )
    return new_state


def toggle_save(user_id: IdLike, post_id: IdLike, is_saved: bool) -> bool:
    """Unsave when *is_saved*, save otherwise.  Returns the new state."""
    new_state = not is_saved
    _set_relationship(
        SAVED_POSTS_TABLE,
        SAVED_POSTS_CONFLICT_KEY,
        {"user_id": str(user_id), "post_id": str(post_id)},
        new_state,
        "update saved status",
    )
    return new_state


def hire_architect(homeowner_id: IdLike, architect_id: IdLike) -> HireState:
    """Record that *homeowner_id* hired *architect_id*.

    Raises ``NotFoundError`` when *architect_id* is not an architect.  The
    returned state embeds the architect with contact details now visible.
    """
    # A bad id must never create a dangling hire
    get_architect(architect_id)

    _set_relationship(
        HIRED_ARCHITECTS_TABLE,
        HIRED_ARCHITECTS_CONFLICT_KEY,
        {"homeowner_id": str(homeowner_id), "architect_id": str(architect_id)},
        True,
        "hire architect",
    )
    logger.info(
        "architect_hired",
        extra={"homeowner_id": str(homeowner_id), "architect_id": str(architect_id)},
    )

    architect = get_architect(architect_id, viewer_id=homeowner_id)
    return HireState(architect_id=architect.id, architect=architect)


# ---------------------------------------------------------------------------
# Lists
# ---------------------------------------------------------------------------

def _embedded_user(item: dict[str, Any], key: str) -> dict[str, Any]:
    data = dict(item)
    embedded = data.pop(key, None)
    data[key] = user_from_row(embedded) if embedded else None
    return data


def get_followers(user_id: IdLike, viewer_id: IdLike | None = None) -> list[Follower]:
    """``follows`` rows where *user_id* is followed, embedding each follower."""
    result = execute(
        get_supabase()
        .table(FOLLOWS_TABLE)
        .select(FOLLOWER_SELECT)
        .eq("following_id", str(user_id)),
        "load followers",
    )
    linked = get_hire_links(viewer_id)
    followers: list[Follower] = []
    for item in result.data or []:
        record = Follower(**_embedded_user(item, "follower"))
        if record.follower is not None:
            record.follower = apply_contact_visibility(record.follower, viewer_id, linked)
        followers.append(record)
    return followers


def get_following(user_id: IdLike, viewer_id: IdLike | None = None) -> list[Following]:
    """``follows`` rows where *user_id* is the follower, embedding each followee."""
    result = execute(
        get_supabase()
        .table(FOLLOWS_TABLE)
        .select(FOLLOWING_SELECT)
        .eq("follower_id", str(user_id)),
        "load following",
    )
    linked = get_hire_links(viewer_id)
    following: list[Following] = []
    for item in result.data or []:
        record = Following(**_embedded_user(item, "following"))
        if record.following is not None:
            record.following = apply_contact_visibility(record.following, viewer_id, linked)
        following.append(record)
    return following


def get_saved_posts(user_id: IdLike) -> list[SavedPost]:
    """Posts saved by *user_id*, newest save first, with post owners embedded."""
    result = execute(
        get_supabase()
        .table(SAVED_POSTS_TABLE)
        .select(SAVED_POST_SELECT)
        .eq("user_id", str(user_id))
        .order("created_at", desc=True),
        "load saved posts",
    )
    linked = get_hire_links(user_id)
    saved: list[SavedPost] = []
    for item in result.data or []:
        data = dict(item)
        post_row = data.pop("post", None)
        post = None
        if post_row:
            post = post_from_row(post_row).model_copy(update={"is_saved": True})
            post = apply_post_owner_visibility([post], user_id, linked)[0]
        saved.append(SavedPost(**data, post=post))
    return saved


def get_hired_architects(homeowner_id: IdLike) -> list[HiredArchitect]:
    """Architects hired by *homeowner_id*; their contact details are visible."""
    result = execute(
        get_supabase()
        .table(HIRED_ARCHITECTS_TABLE)
        .select(HIRED_ARCHITECT_SELECT)
        .eq("homeowner_id", str(homeowner_id)),
        "load hired architects",
    )
    hired: list[HiredArchitect] = []
    for item in result.data or []:
        record = HiredArchitect(**_embedded_user(item, "architect"))
        if record.architect is not None:
            record.architect = record.architect.model_copy(update={"is_hired": True})
        hired.append(record)
    return hired

