"""Profile data-access service.

Reads and updates rows of the ``users`` table, computes profile statistics,
and annotates users with viewer-relative flags (``is_following``,
``is_hired``).

Contact details (``contact`` and ``contact_email``) are only returned to the
user themself or to a viewer linked to that user through a hire record, in
either direction.  Hiring an architect is what makes their contact visible.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from archconnect.core.constants import (
    FOLLOWS_TABLE,
    HIRED_ARCHITECTS_TABLE,
    POSTS_TABLE,
    USERS_TABLE,
)
from archconnect.core.exceptions import NotFoundError, ValidationError
from archconnect.db.supabase import count_rows, execute, get_supabase, row_exists
from archconnect.models.enums import UserRole
from archconnect.models.post import Post, post_from_row
from archconnect.models.user import (
    EnhancedProfileUpdate,
    ProfileStats,
    ProfileUpdate,
    User,
    user_from_row,
)

logger = logging.getLogger(__name__)

IdLike = str | UUID


# ---------------------------------------------------------------------------
# Relationship lookups
# ---------------------------------------------------------------------------

def get_followed_ids(follower_id: IdLike) -> set[str]:
    """Ids of every user *follower_id* follows."""
    result = execute(
        get_supabase()
        .table(FOLLOWS_TABLE)
        .select("following_id")
        .eq("follower_id", str(follower_id)),
        "load followed users",
    )
    return {row["following_id"] for row in result.data or []}


def get_hired_architect_ids(homeowner_id: IdLike) -> set[str]:
    """Ids of every architect *homeowner_id* has hired."""
    result = execute(
        get_supabase()
        .table(HIRED_ARCHITECTS_TABLE)
        .select("architect_id")
        .eq("homeowner_id", str(homeowner_id)),
        "load hired architects",
    )
    return {row["architect_id"] for row in result.data or []}


def get_hiring_homeowner_ids(architect_id: IdLike) -> set[str]:
    """Ids of every homeowner who has hired *architect_id*."""
    result = execute(
        get_supabase()
        .table(HIRED_ARCHITECTS_TABLE)
        .select("homeowner_id")
        .eq("architect_id", str(architect_id)),
        "load hiring homeowners",
    )
    return {row["homeowner_id"] for row in result.data or []}


def get_hire_links(viewer_id: IdLike | None) -> set[str]:
    """Ids of users linked to *viewer_id* by a hire record, either direction."""
    if viewer_id is None:
        return set()
    return get_hired_architect_ids(viewer_id) | get_hiring_homeowner_ids(viewer_id)


# ---------------------------------------------------------------------------
# Contact visibility
# ---------------------------------------------------------------------------

def apply_contact_visibility(
    user: User,
    viewer_id: IdLike | None,
    linked_ids: set[str],
) -> User:
    """Return *user* with contact fields cleared unless *viewer_id* may see them."""
    uid = str(user.id)
    if viewer_id is not None and (uid == str(viewer_id) or uid in linked_ids):
        return user
    return user.model_copy(update={"contact": None, "contact_email": None})


def apply_post_owner_visibility(
    posts: list[Post],
    viewer_id: IdLike | None,
    linked_ids: set[str],
) -> list[Post]:
    """Apply ``apply_contact_visibility`` to the embedded owner of each post."""
    visible: list[Post] = []
    for post in posts:
        if post.user is not None:
            post = post.model_copy(
                update={"user": apply_contact_visibility(post.user, viewer_id, linked_ids)}
            )
        visible.append(post)
    return visible


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def _fetch_user_row(user_id: IdLike, role: UserRole | None = None) -> dict[str, Any] | None:
    query = get_supabase().table(USERS_TABLE).select("*").eq("id", str(user_id))
    if role is not None:
        query = query.eq("role", role.value)
    result = execute(query.limit(1), "load profile")
    rows = result.data or []
    return rows[0] if rows else None


def get_user_by_id(user_id: IdLike, viewer_id: IdLike | None = None) -> User:
    """Return a profile as seen by *viewer_id*.

    Raises ``NotFoundError`` when no such user exists.
    """
    row = _fetch_user_row(user_id)
    if row is None:
        raise NotFoundError("user", str(user_id))

    user = user_from_row(row)
    if viewer_id is None or str(viewer_id) == str(user.id):
        return user

    is_hired = user.role == UserRole.architect and row_exists(
        HIRED_ARCHITECTS_TABLE,
        {"homeowner_id": str(viewer_id), "architect_id": str(user.id)},
        "check hire status",
    )
    user = user.model_copy(
        update={
            "is_following": row_exists(
                FOLLOWS_TABLE,
                {"follower_id": str(viewer_id), "following_id": str(user.id)},
                "check follow status",
            ),
            "is_hired": is_hired,
        }
    )
    return apply_contact_visibility(user, viewer_id, get_hire_links(viewer_id))


def get_profile_stats(user_id: IdLike, viewer_id: IdLike | None = None) -> ProfileStats:
    """Count followers, followings and designs of *user_id*.

    When *viewer_id* is given, also report whether the viewer follows the
    profile and has hired it.
    """
    uid = str(user_id)
    stats = ProfileStats(
        followers_count=count_rows(FOLLOWS_TABLE, "following_id", uid, "load follower count"),
        following_count=count_rows(FOLLOWS_TABLE, "follower_id", uid, "load following count"),
        designs_count=count_rows(POSTS_TABLE, "user_id", uid, "load design count"),
    )

    if viewer_id is not None:
        vid = str(viewer_id)
        stats.is_following = row_exists(
            FOLLOWS_TABLE,
            {"follower_id": vid, "following_id": uid},
            "check follow status",
        )
        stats.is_hired = row_exists(
            HIRED_ARCHITECTS_TABLE,
            {"homeowner_id": vid, "architect_id": uid},
            "check hire status",
        )

    return stats


def get_architects(viewer_id: IdLike | None = None) -> list[User]:
    """Return every architect, annotated for *viewer_id* when given.

    Follow and hire state is resolved with one lookup per relationship
    rather than one round-trip per architect.
    """
    result = execute(
        get_supabase()
        .table(USERS_TABLE)
        .select("*")
        .eq("role", UserRole.architect.value),
        "load architects",
    )
    architects = [user_from_row(row) for row in result.data or []]

    if viewer_id is None:
        return [apply_contact_visibility(a, None, set()) for a in architects]

    followed = get_followed_ids(viewer_id)
    hired = get_hired_architect_ids(viewer_id)

    annotated: list[User] = []
    for architect in architects:
        aid = str(architect.id)
        architect = architect.model_copy(
            update={"is_following": aid in followed, "is_hired": aid in hired}
        )
        annotated.append(apply_contact_visibility(architect, viewer_id, hired))
    return annotated


def get_architect(architect_id: IdLike, viewer_id: IdLike | None = None) -> User:
    """Return one architect as seen by *viewer_id*.

    Raises ``NotFoundError`` when *architect_id* is not an architect.
    """
    row = _fetch_user_row(architect_id, role=UserRole.architect)
    if row is None:
        raise NotFoundError("architect", str(architect_id))

    architect = user_from_row(row)
    linked: set[str] = set()
    if viewer_id is not None and str(viewer_id) != str(architect.id):
        hired = get_hired_architect_ids(viewer_id)
        linked = hired
        architect = architect.model_copy(
            update={
                "is_following": str(architect.id) in get_followed_ids(viewer_id),
                "is_hired": str(architect.id) in hired,
            }
        )
    return apply_contact_visibility(architect, viewer_id, linked)


def get_architect_portfolio(
    architect_id: IdLike,
    viewer_id: IdLike | None = None,
) -> dict[str, Any]:
    """Return ``{"architect": User, "designs": list[Post]}``, newest design first."""
    architect = get_architect(architect_id, viewer_id)

    designs_result = execute(
        get_supabase()
        .table(POSTS_TABLE)
        .select("*")
        .eq("user_id", str(architect_id))
        .order("created_at", desc=True),
        "load architect designs",
    )
    designs = [post_from_row(r) for r in designs_result.data or []]

    return {
        "architect": architect,
        "designs": designs,
    }


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

def _update_user(user_id: IdLike, row: dict[str, Any], action: str) -> User:
    row["updated_at"] = datetime.now(timezone.utc).isoformat()
    result = execute(
        get_supabase().table(USERS_TABLE).update(row).eq("id", str(user_id)),
        action,
    )
    if not result.data:
        raise NotFoundError("user", str(user_id))

    logger.info(
        "profile_updated",
        extra={"user_id": str(user_id), "fields": sorted(row)},
    )
    return user_from_row(result.data[0])


def update_profile(user_id: IdLike, changes: ProfileUpdate) -> User:
    """Write the basic profile fields the client sent.

    Raises ``ValidationError`` when ``username`` is sent as null.
    """
    row = changes.to_row()
    if "username" in row and not row["username"]:
        raise ValidationError("Username cannot be empty")
    return _update_user(user_id, row, "update profile")


def update_enhanced_profile(user_id: IdLike, changes: EnhancedProfileUpdate) -> User:
    """Write education, experience, skills, contact email and social links."""
    return _update_user(user_id, changes.to_row(), "update enhanced profile")
