"""Pydantic schemas for the HTTP API."""

from .post import (
    CommentCreate,
    CommentCreated,
    CommentListResponse,
    CommentView,
    FeedResponse,
    LikeResponse,
    PostCreate,
    PostCreated,
    PostView,
)
from .user import (
    AuthResponse,
    BanRequest,
    LoginRequest,
    ProfileUpdate,
    RegisterRequest,
    UserListResponse,
    UserPublic,
    UserResponse,
    VerifyEmailRequest,
)

__all__ = [
    "CommentCreate", "CommentCreated", "CommentListResponse", "CommentView",
    "FeedResponse", "LikeResponse", "PostCreate", "PostCreated", "PostView",
    "AuthResponse", "BanRequest", "LoginRequest", "ProfileUpdate", "RegisterRequest",
    "UserListResponse", "UserPublic", "UserResponse", "VerifyEmailRequest",
]
