"""MongoDB document-store backend (motor)."""
from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from typing import Any

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)
from pydantic import ValidationError
from pymongo import ASCENDING, UpdateOne
from pymongo.errors import BulkWriteError, PyMongoError

from startup_feed.core.errors import StorageUnavailable
from startup_feed.models import (
    Comment,
    CommentList,
    Like,
    LikeList,
    Post,
    PostList,
    User,
    UserMap,
)

from .base import BackendMode, RecordStore

__all__ = ["MongoRecordStore", "DUPLICATE_KEY_ERROR"]

DUPLICATE_KEY_ERROR = 11000

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _backend_errors(operation: str) -> AsyncIterator[None]:
    try:
        yield
    except PyMongoError as err:
        logger.error("Document store %s failed: %s", operation, err)
        raise StorageUnavailable(f"Document store unavailable during {operation}") from err
    except ValidationError as err:
        logger.error("Malformed document during %s: %s", operation, err)
        raise StorageUnavailable(f"Malformed document during {operation}") from err


class MongoRecordStore(RecordStore):
    """Keep users, posts, comments and likes in four MongoDB collections.

    Users are upserted per email. Posts, comments and likes are replaced
    wholesale (delete all, then insert all) to match the file backend.
    """

    mode = BackendMode.DOCUMENT

    def __init__(
        self,
        database: AsyncIOMotorDatabase,
        client: AsyncIOMotorClient | None = None,
    ) -> None:
        """Bind the store to an already connected database."""
        self.db = database
        self._client = client
        self.users: AsyncIOMotorCollection = database["users"]
        self.posts: AsyncIOMotorCollection = database["posts"]
        self.comments: AsyncIOMotorCollection = database["comments"]
        self.likes: AsyncIOMotorCollection = database["likes"]

    async def ensure_indexes(self) -> None:
        """Create the uniqueness constraints every collection relies on."""
        async with _backend_errors("index creation"):
            await self.users.create_index("email", unique=True)
            await self.posts.create_index("id", unique=True)
            await self.comments.create_index("id", unique=True)
            await self.likes.create_index(
                [
                    ("subject_type", ASCENDING),
                    ("subject_id", ASCENDING),
                    ("user_email", ASCENDING),
                ],
                unique=True,
            )

    async def migrate_from(self, source: RecordStore) -> dict[str, int]:
        """Copy each collection from `source` into its empty counterpart.

        Collections that already hold documents are left untouched, so
        running this again after the first start changes nothing.

        Returns:
            Number of documents inserted per collection.
        """
        migrated: dict[str, int] = {}
        loaders = {
            "users": (self.users, source.load_users),
            "posts": (self.posts, source.load_posts),
            "comments": (self.comments, source.load_comments),
            "likes": (self.likes, source.load_likes),
        }
        for name, (collection, load) in loaders.items():
            async with _backend_errors(f"{name} migration"):
                if await collection.estimated_document_count() > 0:
                    continue
            try:
                loaded = await load()
            except StorageUnavailable as err:
                logger.warning("Skipping %s migration: %s", name, err)
                continue
            records = loaded.values() if isinstance(loaded, Mapping) else loaded
            docs = [record.to_document() for record in records]
            if docs:
                async with _backend_errors(f"{name} migration"):
                    await collection.insert_many(docs, ordered=False)
            migrated[name] = len(docs)
        if migrated:
            logger.info("Migrated flat-file data into document store: %s", migrated)
        return migrated

    # USERS
    async def load_users(self) -> UserMap:
        async with _backend_errors("users load"):
            docs = await self._find(self.users)
            return {doc["email"]: User.model_validate(doc) for doc in docs}

    async def save_users(self, users: UserMap) -> None:
        if not users:
            return
        operations = [
            UpdateOne({"email": email}, {"$set": user.to_document()}, upsert=True)
            for email, user in users.items()
        ]
        async with _backend_errors("users save"):
            await self.users.bulk_write(operations, ordered=False)

    # POSTS
    async def load_posts(self) -> PostList:
        async with _backend_errors("posts load"):
            docs = await self._find(self.posts)
            posts = [Post.model_validate(doc) for doc in docs]
        # created_at is stored as ISO text; order by the parsed datetime.
        return sorted(posts, key=lambda p: (p.created_at, p.id), reverse=True)

    async def save_posts(self, posts: PostList) -> None:
        async with _backend_errors("posts save"):
            await self._replace_all(self.posts, [post.to_document() for post in posts])

    # COMMENTS
    async def load_comments(self) -> CommentList:
        async with _backend_errors("comments load"):
            docs = await self._find(self.comments)
            comments = [Comment.model_validate(doc) for doc in docs]
        return sorted(comments, key=lambda c: (c.created_at, c.id))

    # LIKES
    async def load_likes(self) -> LikeList:
        async with _backend_errors("likes load"):
            docs = await self._find(self.likes)
            return [Like.model_validate(doc) for doc in docs]

    async def save_likes(self, likes: LikeList) -> None:
        async with _backend_errors("likes save"):
            try:
                await self._replace_all(self.likes, [like.to_document() for like in likes])
            except BulkWriteError as err:
                errors = err.details.get("writeErrors", [])
                if not errors or any(e.get("code") != DUPLICATE_KEY_ERROR for e in errors):
                    raise
                # The unique index kept a concurrent duplicate like out.
                logger.warning("Rejected %d duplicate like(s)", len(errors))

    async def close(self) -> None:
        if self._client is not None:
            self._client.close()

    @staticmethod
    async def _find(collection: AsyncIOMotorCollection) -> list[dict[str, Any]]:
        return await collection.find({}, {"_id": 0}).to_list(length=None)

    @staticmethod
    async def _replace_all(
        collection: AsyncIOMotorCollection, docs: list[dict[str, Any]]
    ) -> None:
        await collection.delete_many({})
        if docs:
            await collection.insert_many(docs, ordered=False)
