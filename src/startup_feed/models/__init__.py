# src/startup_feed/models/__init__.py
"""Record types persisted by the storage layer."""

from .base import Record, utcnow
from .comment import Comment
from .like import Like, SubjectType
from .post import Post
from .user import User, UserTier

# Collection shapes handed out by the record store.
UserMap = dict[str, User]
PostList = list[Post]
CommentList = list[Comment]
LikeList = list[Like]

__all__ = [
    "Record", "utcnow",
    "User", "UserTier", "UserMap",
    "Post", "PostList",
    "Comment", "CommentList",
    "Like", "SubjectType", "LikeList",
]
