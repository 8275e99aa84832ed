"""Like toggling for posts and comments."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

from startup_feed.core.errors import SubjectNotFound
from startup_feed.models import Comment, Like, Post, SubjectType, User
from startup_feed.storage import RecordStore

__all__ = ["LikeToggleResult", "toggle_like", "toggle_post_like", "toggle_comment_like"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LikeToggleResult:
    """Outcome of a toggle and the subject's counter afterwards."""

    message: Literal["liked", "unliked"]
    likes_count: int


async def toggle_like(
    store: RecordStore,
    subject_type: SubjectType,
    subject_id: int,
    user: User,
) -> LikeToggleResult:
    """Flip the user's like on a post or comment.

    An existing like is removed and the subject's `likes_count` drops by
    one; otherwise a like is recorded and the counter rises by one.

    Raises:
        SubjectNotFound: If the post or comment does not exist.
    """
    subjects: list[Post] | list[Comment]
    if subject_type is SubjectType.POST:
        subjects = await store.load_posts()
    else:
        subjects = await store.load_comments()

    subject = next((s for s in subjects if s.id == subject_id), None)
    if subject is None:
        raise SubjectNotFound(f"{subject_type.value.capitalize()} not found")

    likes = await store.load_likes()
    key = (subject_type, subject_id, user.email)
    remaining = [like for like in likes if like.key != key]

    message: Literal["liked", "unliked"]
    if len(remaining) != len(likes):
        subject.likes_count -= 1
        likes = remaining
        message = "unliked"
    else:
        likes.append(Like(subject_type=subject_type, subject_id=subject_id, user_email=user.email))
        subject.likes_count += 1
        message = "liked"

    await store.save_likes(likes)
    if subject_type is SubjectType.POST:
        await store.save_posts(subjects)  # type: ignore[arg-type]
    else:
        await store.save_comments(subjects)  # type: ignore[arg-type]

    logger.debug(
        "%s %s %d %s (likes_count=%d)",
        user.email, message, subject_id, subject_type.value, subject.likes_count,
    )
    return LikeToggleResult(message=message, likes_count=subject.likes_count)


async def toggle_post_like(store: RecordStore, post_id: int, user: User) -> LikeToggleResult:
    """Toggle `user`'s like on a post."""
    return await toggle_like(store, SubjectType.POST, post_id, user)


async def toggle_comment_like(store: RecordStore, comment_id: int, user: User) -> LikeToggleResult:
    """Toggle `user`'s like on a comment."""
    return await toggle_like(store, SubjectType.COMMENT, comment_id, user)
