"""Application constants.

Table names, role-based dashboard routes, and defaults applied to new posts.
"""

# ---------------------------------------------------------------------------
# Remote tables
# ---------------------------------------------------------------------------
USERS_TABLE: str = "users"
POSTS_TABLE: str = "posts"
FOLLOWS_TABLE: str = "follows"
LIKES_TABLE: str = "likes"
SAVED_POSTS_TABLE: str = "saved_posts"
HIRED_ARCHITECTS_TABLE: str = "hired_architects"

# Composite keys backing the unique constraints of the join tables
FOLLOWS_CONFLICT_KEY: str = "follower_id,following_id"
LIKES_CONFLICT_KEY: str = "user_id,post_id"
SAVED_POSTS_CONFLICT_KEY: str = "user_id,post_id"
HIRED_ARCHITECTS_CONFLICT_KEY: str = "homeowner_id,architect_id"

# Embedded-relation selects (PostgREST resource embedding)
POST_WITH_OWNER_SELECT: str = "*, user:users(*)"
FOLLOWER_SELECT: str = "*, follower:users!follower_id(*)"
FOLLOWING_SELECT: str = "*, following:users!following_id(*)"
SAVED_POST_SELECT: str = "*, post:posts(*, user:users(*))"
HIRED_ARCHITECT_SELECT: str = "*, architect:users!architect_id(*)"

# ---------------------------------------------------------------------------
# Role-based dashboards
# ---------------------------------------------------------------------------
DASHBOARD_PATHS: dict[str, str] = {
    "architect": "/architect-dashboard",
    "homeowner": "/homeowner-dashboard",
}
LOGIN_PATH: str = "/login"

DEFAULT_ROLE: str = "homeowner"
DEFAULT_USERNAME: str = "User"

# ---------------------------------------------------------------------------
# Post defaults
# ---------------------------------------------------------------------------
DEFAULT_DESIGN_TYPE: str = "Residential"

AI_DESIGN_TYPE: str = "AI-Generated"
AI_DESIGN_TAGS: list[str] = ["ai-generated", "design"]
AI_TITLE_MAX_LENGTH: int = 50
AI_IMAGE_EXTENSION: str = "webp"

# ---------------------------------------------------------------------------
# Error messages shown to end users
# ---------------------------------------------------------------------------
GENERIC_ERROR_MESSAGE: str = "Something went wrong. Please try again later."
