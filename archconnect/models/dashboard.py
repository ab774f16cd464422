"""Response models for the role-specific dashboards."""

from pydantic import BaseModel

from archconnect.models.interactions import HiredArchitect, SavedPost
from archconnect.models.post import Post
from archconnect.models.user import ProfileStats, User


class ArchitectDashboard(BaseModel):
    """Everything the architect dashboard renders."""
    role: str = "architect"
    stats: ProfileStats
    my_posts: list[Post] = []
    followers: list[User] = []
    following: list[User] = []
    other_architects: list[User] = []


class HomeownerDashboard(BaseModel):
    """Everything the homeowner dashboard renders."""
    role: str = "homeowner"
    feed: list[Post] = []
    architects: list[User] = []
    saved_posts: list[SavedPost] = []
    following: list[User] = []
    hired_architects: list[HiredArchitect] = []
