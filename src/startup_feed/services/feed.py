"""Read-side feed assembly and bootstrap sample posts."""
from __future__ import annotations

import logging
from collections import defaultdict
from datetime import timedelta
from typing import Protocol

from startup_feed.core.errors import SubjectNotFound
from startup_feed.core.settings import Settings
from startup_feed.models import Comment, LikeList, Post, PostList, SubjectType, utcnow
from startup_feed.schemas.post import CommentView, PostView
from startup_feed.storage import RecordStore

from .ids import next_record_id

__all__ = ["FeedAssembler", "FeedSeeder", "NoSeeder", "SampleFeedSeeder", "seeder_for"]

logger = logging.getLogger(__name__)

SAMPLE_POSTS: tuple[tuple[str, str, str], ...] = (
    (
        "Kael",
        "kael@gmail.com",
        "Just launched my new startup! Excited to share the journey with everyone. "
        "Building something amazing in the fintech space.",
    ),
    (
        "James",
        "james@gmail.com",
        "Looking for co-founders for my tech startup. "
        "Anyone interested in joining an AI-powered platform?",
    ),
    (
        "Luther",
        "luther@startup.com",
        "Sharing some insights from my recent pitch to investors. "
        "The key is preparation and knowing your numbers!",
    ),
)


class FeedSeeder(Protocol):
    """Strategy invoked when the feed is read while no posts exist."""

    async def seed(self, store: RecordStore) -> PostList:
        """Return the posts to show, writing them to `store` if needed."""
        ...


class NoSeeder:
    """Leave an empty feed empty."""

    async def seed(self, store: RecordStore) -> PostList:
        return []


class SampleFeedSeeder:
    """Write three example posts into an empty post collection."""

    async def seed(self, store: RecordStore) -> PostList:
        existing = await store.load_posts()
        if existing:
            return existing

        now = utcnow()
        base_id = next_record_id([])
        samples = [
            Post(
                id=base_id - offset,
                user_name=name,
                user_email=email,
                content=content,
                created_at=now - timedelta(seconds=offset),
            )
            for offset, (name, email, content) in enumerate(SAMPLE_POSTS)
        ]
        await store.save_posts(samples)
        logger.info("Seeded %d sample posts into the empty feed", len(samples))
        return samples


def seeder_for(config: Settings) -> FeedSeeder:
    """Return the seeding strategy selected by `SEED_SAMPLE_POSTS`."""
    return SampleFeedSeeder() if config.seed_sample_posts else NoSeeder()


def _liked_keys(likes: LikeList, viewer_email: str | None) -> set[tuple[SubjectType, int]]:
    if viewer_email is None:
        return set()
    return {(like.subject_type, like.subject_id) for like in likes if like.user_email == viewer_email}


def _comment_view(comment: Comment, liked: set[tuple[SubjectType, int]]) -> CommentView:
    return CommentView.model_validate(
        {**comment.model_dump(), "is_liked": (SubjectType.COMMENT, comment.id) in liked}
    )


class FeedAssembler:
    """Join posts with their comments and one viewer's likes.

    Counters are returned exactly as stored; the assembler never writes
    except through the seeding strategy.
    """

    def __init__(self, store: RecordStore, seeder: FeedSeeder | None = None) -> None:
        self.store = store
        self.seeder = seeder or NoSeeder()

    async def get_feed(self, viewer_email: str | None = None) -> list[PostView]:
        """Return every post newest first with comments oldest first."""
        posts = await self.store.load_posts()
        if not posts:
            posts = await self.seeder.seed(self.store)

        comments = await self.store.load_comments()
        liked = _liked_keys(await self.store.load_likes(), viewer_email)

        by_post: dict[int, list[CommentView]] = defaultdict(list)
        for comment in sorted(comments, key=lambda c: (c.created_at, c.id)):
            by_post[comment.post_id].append(_comment_view(comment, liked))

        ordered = sorted(posts, key=lambda p: (p.created_at, p.id), reverse=True)
        return [
            PostView.model_validate(
                {
                    **post.model_dump(),
                    "comments": by_post.get(post.id, []),
                    "is_liked": (SubjectType.POST, post.id) in liked,
                }
            )
            for post in ordered
        ]

    async def get_comments(self, post_id: int, viewer_email: str | None = None) -> list[CommentView]:
        """Return the comments of one post, oldest first.

        Raises:
            SubjectNotFound: If the post does not exist.
        """
        posts = await self.store.load_posts()
        if not any(p.id == post_id for p in posts):
            raise SubjectNotFound("Post not found")
        comments = [c for c in await self.store.load_comments() if c.post_id == post_id]
        liked = _liked_keys(await self.store.load_likes(), viewer_email)
        return [
            _comment_view(comment, liked)
            for comment in sorted(comments, key=lambda c: (c.created_at, c.id))
        ]
