"""
User Schemas

Request/response models for account, authentication and channel endpoints.

Registration and image updates are multipart forms, so their inputs are
read as Form/File parameters in the handlers rather than through a body
schema.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, model_validator

from vidshare.shared.schemas.common import BaseSchema


class UserLogin(BaseModel):
    """Schema for user login: username or email, plus password."""

    username: Optional[str] = None
    email: Optional[EmailStr] = None
    password: str = Field(min_length=1)

    @model_validator(mode="after")
    def require_identifier(self) -> "UserLogin":
        if not (self.username or self.email):
            raise ValueError("username or email is required")
        return self


class RefreshTokenRequest(BaseModel):
    refresh_token: str = Field(min_length=1)


class ChangePasswordRequest(BaseModel):
    old_password: str = Field(min_length=1)
    new_password: str = Field(min_length=8, description="New password (minimum 8 characters)")
    confirm_password: str


class UpdateAccountRequest(BaseModel):
    """At least one of full_name / email."""

    full_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None


class UserResponse(BaseSchema):
    """The signed-in user's own profile (never includes the password hash)."""

    id: UUID
    username: str
    email: str
    full_name: str
    avatar_url: str
    cover_image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class AuthResponse(TokenResponse):
    """Schema for login response: both tokens plus the profile."""

    user: UserResponse


class ChannelResponse(BaseSchema):
    """A channel as seen by the viewer."""

    id: UUID
    username: str
    full_name: str
    email: str
    avatar_url: str
    cover_image_url: Optional[str] = None
    created_at: datetime
    subscribers_count: int
    channels_subscribed_to_count: int
    is_subscribed: bool


class UserCard(BaseSchema):
    """Compact user shown in subscriber/subscription lists."""

    id: UUID
    username: str
    full_name: str
    avatar_url: str
    subscribed_at: datetime
    subscribers_count: Optional[int] = None
