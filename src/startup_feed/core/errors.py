"""Domain errors raised by the storage and service layers.

Each error carries the HTTP status the API layer reports for it, so the
routers never translate errors one by one.
"""

from __future__ import annotations

from fastapi import status


class FeedError(RuntimeError):
    """Base exception for every failure surfaced to callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class InvalidContent(FeedError):
    """Raised when a post or comment carries neither text nor attachments."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Content or attachments required"


class Unauthorized(FeedError):
    """Raised when credentials do not identify a user."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Invalid email or password"


class Forbidden(FeedError):
    """Raised when the acting user may not perform the operation."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Not allowed"


class SubjectNotFound(FeedError):
    """Raised when a referenced user, post or comment does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class Conflict(FeedError):
    """Raised when a record with the same identity key already exists."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "Already exists"


class StorageUnavailable(FeedError):
    """Raised when the active backend cannot be read or written."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Storage unavailable"
