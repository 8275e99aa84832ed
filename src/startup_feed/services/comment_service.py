"""Service-level helpers for comments and the parent post's comment counter."""
from __future__ import annotations

import logging
from collections.abc import Iterable

from startup_feed.core.errors import SubjectNotFound
from startup_feed.core.settings import Settings
from startup_feed.models import Comment, CommentList, SubjectType, User
from startup_feed.storage import RecordStore

from .ids import next_record_id
from .rules import clean_content, ensure_can_modify, ensure_not_banned

__all__ = ["add_comment", "delete_comment", "list_comments"]

logger = logging.getLogger(__name__)


async def list_comments(store: RecordStore) -> CommentList:
    """Return every comment, oldest first."""
    comments = await store.load_comments()
    return sorted(comments, key=lambda c: (c.created_at, c.id))


async def add_comment(
    store: RecordStore,
    post_id: int,
    author: User,
    content: str | None,
    attachments: Iterable[str] | None = None,
) -> Comment:
    """Attach a comment to a post and bump the post's `comments_count`.

    Raises:
        InvalidContent: If both the trimmed text and the attachments are empty.
        Forbidden: If the author is banned.
        SubjectNotFound: If the parent post does not exist.
    """
    text, files = clean_content(content, attachments, "Comment")
    ensure_not_banned(author, "comments")

    posts = await store.load_posts()
    parent = next((p for p in posts if p.id == post_id), None)
    if parent is None:
        raise SubjectNotFound("Post not found")

    comments = await store.load_comments()
    comment = Comment(
        id=next_record_id(c.id for c in comments),
        post_id=post_id,
        user_email=author.email,
        user_name=author.name,
        content=text,
        attachments=files,
    )
    comments.append(comment)
    await store.save_comments(comments)

    parent.comments_count += 1
    await store.save_posts(posts)
    logger.info("Comment %d added to post %d by %s", comment.id, post_id, author.email)
    return comment


async def delete_comment(
    store: RecordStore,
    comment_id: int,
    actor: User,
    config: Settings | None = None,
) -> Comment:
    """Delete one comment and the likes on it.

    Sibling comments are left alone; the parent post's `comments_count`
    drops by exactly one.

    Raises:
        SubjectNotFound: If no comment has `comment_id`.
        Forbidden: If `actor` is neither the author nor the admin.
    """
    comments = await store.load_comments()
    target = next((c for c in comments if c.id == comment_id), None)
    if target is None:
        raise SubjectNotFound("Comment not found")
    ensure_can_modify(actor, target.user_email, config)

    await store.save_comments([c for c in comments if c.id != comment_id])

    likes = await store.load_likes()
    remaining = [
        like
        for like in likes
        if not (like.subject_type is SubjectType.COMMENT and like.subject_id == comment_id)
    ]
    if len(remaining) != len(likes):
        await store.save_likes(remaining)

    posts = await store.load_posts()
    parent = next((p for p in posts if p.id == target.post_id), None)
    if parent is not None:
        parent.comments_count -= 1
        await store.save_posts(posts)
    else:
        logger.warning("Comment %d referenced missing post %d", comment_id, target.post_id)

    logger.info("Comment %d deleted by %s", comment_id, actor.email)
    return target
