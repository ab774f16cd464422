"""Role-specific dashboard aggregation.

Each dashboard is assembled from the same service functions the individual
endpoints use; nothing here talks to Supabase directly.
"""

from __future__ import annotations

import logging

from archconnect.models.dashboard import ArchitectDashboard, HomeownerDashboard
from archconnect.models.user import User
from archconnect.services.interactions import (
    get_followers,
    get_following,
    get_hired_architects,
    get_saved_posts,
)
from archconnect.services.posts import get_feed, get_posts
from archconnect.services.profiles import get_architects, get_profile_stats

logger = logging.getLogger(__name__)


def get_architect_dashboard(user: User) -> ArchitectDashboard:
    """Own designs, stats, followers / following and the other architects."""
    followers = get_followers(user.id, viewer_id=user.id)
    following = get_following(user.id, viewer_id=user.id)

    return ArchitectDashboard(
        stats=get_profile_stats(user.id),
        my_posts=get_posts(user.id),
        followers=[f.follower for f in followers if f.follower is not None],
        following=[f.following for f in following if f.following is not None],
        other_architects=[
            a for a in get_architects(viewer_id=user.id) if a.id != user.id
        ],
    )


def get_homeowner_dashboard(user: User, followed_only: bool = False) -> HomeownerDashboard:
    """Feed, architects to hire, saved designs, follows and hires."""
    following = get_following(user.id, viewer_id=user.id)

    return HomeownerDashboard(
        feed=get_feed(user.id, followed_only=followed_only),
        architects=get_architects(viewer_id=user.id),
        saved_posts=get_saved_posts(user.id),
        following=[f.following for f in following if f.following is not None],
        hired_architects=get_hired_architects(user.id),
    )
