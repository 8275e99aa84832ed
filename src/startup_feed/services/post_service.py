"""Service-level helpers for creating and deleting posts."""
from __future__ import annotations

import logging
from collections.abc import Iterable

from startup_feed.core.errors import SubjectNotFound
from startup_feed.core.settings import Settings
from startup_feed.models import Post, SubjectType, User
from startup_feed.storage import RecordStore

from .ids import next_record_id
from .rules import clean_content, ensure_can_modify, ensure_not_banned

__all__ = ["create_post", "delete_post", "get_post"]

logger = logging.getLogger(__name__)


async def create_post(
    store: RecordStore,
    author: User,
    content: str | None,
    attachments: Iterable[str] | None = None,
) -> Post:
    """Publish a new post at the head of the feed.

    Args:
        store: Active record store.
        author: Acting user, already authenticated by the caller.
        content: Post text; surrounding whitespace is dropped.
        attachments: Optional attachment references (URLs or data URIs).

    Returns:
        The stored post with both counters at zero.

    Raises:
        InvalidContent: If both the trimmed text and the attachments are empty.
        Forbidden: If the author is banned.
    """
    text, files = clean_content(content, attachments, "Post")
    ensure_not_banned(author, "posts")

    posts = await store.load_posts()
    post = Post(
        id=next_record_id(p.id for p in posts),
        user_email=author.email,
        user_name=author.name,
        content=text,
        attachments=files,
    )
    posts.insert(0, post)
    await store.save_posts(posts)
    logger.info("Post %d created by %s", post.id, author.email)
    return post


async def get_post(store: RecordStore, post_id: int) -> Post:
    """Return one post or raise `SubjectNotFound`."""
    for post in await store.load_posts():
        if post.id == post_id:
            return post
    raise SubjectNotFound("Post not found")


async def delete_post(
    store: RecordStore,
    post_id: int,
    actor: User,
    config: Settings | None = None,
) -> Post:
    """Delete a post together with its comments and every like on either.

    The post is removed first, then its comments, then the likes that
    referenced the post or one of those comments.

    Raises:
        SubjectNotFound: If no post has `post_id`.
        Forbidden: If `actor` is neither the author nor the admin.
    """
    posts = await store.load_posts()
    target = next((p for p in posts if p.id == post_id), None)
    if target is None:
        raise SubjectNotFound("Post not found")
    ensure_can_modify(actor, target.user_email, config)

    await store.save_posts([p for p in posts if p.id != post_id])

    comments = await store.load_comments()
    removed_comment_ids = {c.id for c in comments if c.post_id == post_id}
    if removed_comment_ids:
        await store.save_comments([c for c in comments if c.id not in removed_comment_ids])

    likes = await store.load_likes()
    remaining = [
        like
        for like in likes
        if not (
            (like.subject_type is SubjectType.POST and like.subject_id == post_id)
            or (
                like.subject_type is SubjectType.COMMENT
                and like.subject_id in removed_comment_ids
            )
        )
    ]
    if len(remaining) != len(likes):
        await store.save_likes(remaining)

    logger.info(
        "Post %d deleted by %s (%d comments, %d likes removed)",
        post_id,
        actor.email,
        len(removed_comment_ids),
        len(likes) - len(remaining),
    )
    return target
