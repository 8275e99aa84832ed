# src/startup_feed/models/comment.py
"""Comments attached to posts."""

from datetime import datetime

from pydantic import Field

from .base import Record, utcnow


class Comment(Record):
    """Reply to a post; removed together with its parent."""

    id: int
    post_id: int
    user_email: str
    user_name: str
    content: str = ""
    attachments: list[str] = Field(default_factory=list)
    likes_count: int = 0
    created_at: datetime = Field(default_factory=utcnow)
