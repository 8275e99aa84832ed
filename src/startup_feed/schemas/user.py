"""User-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from startup_feed.models import UserTier


class RegisterRequest(BaseModel):
    """Schema for account registration."""

    name: str = Field("", description="Display name")
    email: str = Field("", description="Email address; identifies the account")
    password: str = Field("", description="Account password")


class LoginRequest(BaseModel):
    """Schema for password login."""

    email: str
    password: str


class VerifyEmailRequest(BaseModel):
    """Schema for confirming an email address."""

    email: str
    verification_code: str | None = Field(None, description="Code sent by email")


class ProfileUpdate(BaseModel):
    """Schema for updating the caller's profile."""

    name: str = Field(..., min_length=1, max_length=100)
    profile_picture: str | None = None


class BanRequest(BaseModel):
    """Schema for banning or unbanning a user."""

    banned: bool


class UserPublic(BaseModel):
    """Account fields safe to return to clients."""

    id: int
    name: str
    email: str
    verified: bool
    tier: UserTier
    banned: bool
    registered_at: datetime
    profile_picture: str | None = None
    is_admin: bool = False

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    """Response for register and login."""

    message: str
    user: UserPublic
    token: str


class UserResponse(BaseModel):
    """Response wrapping a single account."""

    message: str
    user: UserPublic


class UserListResponse(BaseModel):
    """Response for the admin user listing."""

    users: list[UserPublic]
