# src/startup_feed/models/post.py
"""Top-level feed posts."""

from datetime import datetime

from pydantic import Field

from .base import Record, utcnow


class Post(Record):
    """Content entity published to the feed.

    `likes_count` and `comments_count` are denormalized counters kept in
    step with the like and comment collections by the service layer.
    """

    id: int
    user_email: str
    user_name: str
    content: str = ""
    attachments: list[str] = Field(default_factory=list)
    likes_count: int = 0
    comments_count: int = 0
    created_at: datetime = Field(default_factory=utcnow)
