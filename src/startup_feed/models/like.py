# src/startup_feed/models/like.py
"""Likes on posts and comments."""

from datetime import datetime
from enum import Enum

from pydantic import Field

from .base import Record, utcnow


class SubjectType(str, Enum):
    """Kind of record a like refers to."""

    POST = "post"
    COMMENT = "comment"


class Like(Record):
    """Binary like by one user on one subject.

    (subject_type, subject_id, user_email) identifies a like; at most one
    exists per tuple.
    """

    subject_type: SubjectType
    subject_id: int
    user_email: str
    created_at: datetime = Field(default_factory=utcnow)

    @property
    def key(self) -> tuple[SubjectType, int, str]:
        """Return the identity tuple of this like."""
        return (self.subject_type, self.subject_id, self.user_email)
