"""Design post service.

Architects publish designs (image + metadata) and toggle their
"hire me" availability; everyone browses a newest-first feed annotated with
their own like / save state.
"""

from __future__ import annotations

import logging
from uuid import UUID, uuid4

from archconnect.core.config import settings
from archconnect.core.constants import (
    DEFAULT_DESIGN_TYPE,
    LIKES_TABLE,
    POST_WITH_OWNER_SELECT,
    POSTS_TABLE,
    SAVED_POSTS_TABLE,
)
from archconnect.core.exceptions import NotFoundError, ValidationError
from archconnect.db.storage import upload_public_file
from archconnect.db.supabase import count_rows, execute, get_supabase, row_exists
from archconnect.models.post import Post, post_from_row
from archconnect.services.profiles import (
    apply_post_owner_visibility,
    get_followed_ids,
    get_hire_links,
)

logger = logging.getLogger(__name__)

IdLike = str | UUID


def _file_extension(filename: str | None) -> str:
    if filename and "." in filename:
        return filename.rsplit(".", 1)[-1].lower()
    return "jpg"


def insert_post(
    owner_id: IdLike,
    title: str,
    image_url: str,
    description: str | None = None,
    design_type: str | None = None,
    tags: list[str] | None = None,
    hire_me: bool = False,
) -> Post:
    """Insert a ``posts`` row, applying the defaults for optional fields."""
    if not title or not owner_id:
        raise ValidationError("Title and user_id are required for creating a post")

    result = execute(
        get_supabase()
        .table(POSTS_TABLE)
        .insert({
            "title": title,
            "description": description or None,
            "image_url": image_url,
            "user_id": str(owner_id),
            "design_type": design_type or DEFAULT_DESIGN_TYPE,
            "tags": tags or [],
            "hire_me": hire_me,
        }),
        "create the post",
    )
    post = post_from_row(result.data[0])
    logger.info(
        "post_created",
        extra={"post_id": str(post.id), "user_id": str(owner_id)},
    )
    return post


def create_post(
    owner_id: IdLike,
    title: str,
    image: bytes,
    filename: str | None = None,
    content_type: str | None = None,
    description: str | None = None,
    design_type: str | None = None,
    tags: list[str] | None = None,
    hire_me: bool = False,
) -> Post:
    """Upload *image* to the designs bucket and publish a post referencing it.

    The title is checked before anything is uploaded.
    """
    if not title or not title.strip():
        raise ValidationError("Title and user_id are required for creating a post")
    if not image:
        raise ValidationError("An image is required for creating a post")

    path = f"designs/{uuid4().hex}.{_file_extension(filename)}"
    image_url = upload_public_file(settings.DESIGNS_BUCKET, path, image, content_type)

    return insert_post(
        owner_id,
        title=title.strip(),
        image_url=image_url,
        description=description,
        design_type=design_type,
        tags=tags,
        hire_me=hire_me,
    )


def get_posts(user_id: IdLike | None = None) -> list[Post]:
    """Posts with their owners, newest first, optionally of one owner."""
    query = (
        get_supabase()
        .table(POSTS_TABLE)
        .select(POST_WITH_OWNER_SELECT)
        .order("created_at", desc=True)
    )
    if user_id is not None:
        query = query.eq("user_id", str(user_id))

    result = execute(query, "load posts")
    return [post_from_row(row) for row in result.data or []]


def _post_ids_for(table: str, user_id: IdLike, action: str) -> set[str]:
    result = execute(
        get_supabase().table(table).select("post_id").eq("user_id", str(user_id)),
        action,
    )
    return {row["post_id"] for row in result.data or []}


def get_feed(viewer_id: IdLike, followed_only: bool = False) -> list[Post]:
    """The viewer's feed, each post flagged with ``is_liked`` / ``is_saved``.

    With *followed_only*, the feed is restricted to owners the viewer
    follows; a viewer who follows nobody sees every post.
    """
    query = (
        get_supabase()
        .table(POSTS_TABLE)
        .select(POST_WITH_OWNER_SELECT)
        .order("created_at", desc=True)
    )
    if followed_only:
        followed = get_followed_ids(viewer_id)
        if followed:
            query = query.in_("user_id", sorted(followed))

    result = execute(query, "load the design posts feed")
    posts = [post_from_row(row) for row in result.data or []]

    liked = _post_ids_for(LIKES_TABLE, viewer_id, "load liked posts")
    saved = _post_ids_for(SAVED_POSTS_TABLE, viewer_id, "load saved posts")
    posts = [
        p.model_copy(update={"is_liked": str(p.id) in liked, "is_saved": str(p.id) in saved})
        for p in posts
    ]
    return apply_post_owner_visibility(posts, viewer_id, get_hire_links(viewer_id))


def get_post_with_status(post_id: IdLike, viewer_id: IdLike) -> Post:
    """One post with its owner, the viewer's like / save state and like count."""
    result = execute(
        get_supabase()
        .table(POSTS_TABLE)
        .select(POST_WITH_OWNER_SELECT)
        .eq("id", str(post_id))
        .limit(1),
        "load the post",
    )
    if not result.data:
        raise NotFoundError("post", str(post_id))

    pid, vid = str(post_id), str(viewer_id)
    post = post_from_row(result.data[0]).model_copy(
        update={
            "is_liked": row_exists(
                LIKES_TABLE, {"post_id": pid, "user_id": vid}, "check like status"
            ),
            "is_saved": row_exists(
                SAVED_POSTS_TABLE, {"post_id": pid, "user_id": vid}, "check saved status"
            ),
            "likes_count": count_rows(LIKES_TABLE, "post_id", pid, "load like count"),
        }
    )
    return apply_post_owner_visibility([post], viewer_id, get_hire_links(viewer_id))[0]


def toggle_hire_status(post_id: IdLike, owner_id: IdLike, current_status: bool) -> Post:
    """Flip ``hire_me`` on one of *owner_id*'s posts.

    Raises ``NotFoundError`` when the post does not exist or belongs to
    someone else.
    """
    result = execute(
        get_supabase()
        .table(POSTS_TABLE)
        .update({"hire_me": not current_status})
        .eq("id", str(post_id))
        .eq("user_id", str(owner_id)),
        "update availability status",
    )
    if not result.data:
        raise NotFoundError("post", str(post_id))

    logger.info(
        "hire_status_toggled",
        extra={"post_id": str(post_id), "hire_me": not current_status},
    )
    return post_from_row(result.data[0])
