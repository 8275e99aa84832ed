"""Backend-agnostic record store interface."""
from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from startup_feed.models import CommentList, LikeList, PostList, UserMap

__all__ = ["BackendMode", "RecordStore"]


class BackendMode(str, Enum):
    """Physical storage active for the lifetime of the process."""

    FILE = "file"
    DOCUMENT = "mongo"


class RecordStore(ABC):
    """Load and save whole collections against one backend.

    Every load returns a fresh snapshot; nothing changes in storage until
    the matching save is awaited. Saves replace the entire collection, so
    two callers interleaving load/modify/save can lose an update.
    Backend failures raise `StorageUnavailable`.
    """

    mode: BackendMode

    @abstractmethod
    async def load_users(self) -> UserMap:
        """Return every user keyed by email."""

    @abstractmethod
    async def save_users(self, users: UserMap) -> None:
        """Persist the given users."""

    @abstractmethod
    async def load_posts(self) -> PostList:
        """Return every post, newest first."""

    @abstractmethod
    async def save_posts(self, posts: PostList) -> None:
        """Replace the stored posts with `posts`."""

    @abstractmethod
    async def load_comments(self) -> CommentList:
        """Return every comment, oldest first."""

    @abstractmethod
    async def save_comments(self, comments: CommentList) -> None:
        """Replace the stored comments with `comments`."""

    @abstractmethod
    async def load_likes(self) -> LikeList:
        """Return every like on posts and comments."""

    @abstractmethod
    async def save_likes(self, likes: LikeList) -> None:
        """Replace the stored likes with `likes`."""

    async def counts(self) -> dict[str, int]:
        """Return the size of each collection."""
        return {
            "users": len(await self.load_users()),
            "posts": len(await self.load_posts()),
            "comments": len(await self.load_comments()),
            "likes": len(await self.load_likes()),
        }

    async def close(self) -> None:
        """Release backend resources."""
