"""Request / response models for the auth endpoints."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from archconnect.models.enums import UserRole
from archconnect.models.user import User


class SignUpRequest(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=6)
    username: str = Field(..., min_length=1)
    role: UserRole


class SignUpResponse(BaseModel):
    user_id: UUID | None = None
    session_issued: bool = False
    message: str = "Registration successful. Please log in with your new account"


class SignInRequest(BaseModel):
    email: str
    password: str


class SignInResponse(BaseModel):
    """Tokens issued by the auth service plus the role-based redirect."""
    access_token: str
    refresh_token: str | None = None
    expires_at: datetime | None = None
    user: User
    redirect_to: str


class CurrentUserResponse(BaseModel):
    """Response for GET /auth/me."""
    user: User
    redirect_to: str
