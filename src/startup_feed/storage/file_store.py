"""Flat JSON file backend."""
from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

from pydantic import ValidationError

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

__all__ = ["FileRecordStore", "USERS_FILE", "POSTS_FILE", "COMMENTS_FILE", "LIKES_FILE"]

USERS_FILE = "registered-users.json"
POSTS_FILE = "posts.json"
COMMENTS_FILE = "comments.json"
LIKES_FILE = "likes.json"

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FileRecordStore(RecordStore):
    """Store each collection as one JSON document inside `data_dir`.

    Users are written as an object keyed by email; posts, comments and
    likes as arrays. Every save rewrites the whole file atomically.
    """

    mode = BackendMode.FILE

    def __init__(self, data_dir: Path | str) -> None:
        self.data_dir = Path(data_dir)
        self.users_file = self.data_dir / USERS_FILE
        self.posts_file = self.data_dir / POSTS_FILE
        self.comments_file = self.data_dir / COMMENTS_FILE
        self.likes_file = self.data_dir / LIKES_FILE

    # USERS
    async def load_users(self) -> UserMap:
        raw = await self._read(self.users_file, default={})
        if not isinstance(raw, dict):
            raise StorageUnavailable(f"{self.users_file.name} must hold a JSON object")
        return _parse(
            self.users_file,
            lambda: {email: User.model_validate(doc) for email, doc in raw.items()},
        )

    async def save_users(self, users: UserMap) -> None:
        payload = {email: user.to_document() for email, user in users.items()}
        await self._write(self.users_file, payload)

    # POSTS
    async def load_posts(self) -> PostList:
        raw = await self._read_array(self.posts_file)
        return _parse(self.posts_file, lambda: [Post.model_validate(doc) for doc in raw])

    async def save_posts(self, posts: PostList) -> None:
        await self._write(self.posts_file, [post.to_document() for post in posts])

    # COMMENTS
    async def load_comments(self) -> CommentList:
        raw = await self._read_array(self.comments_file)
        return _parse(self.comments_file, lambda: [Comment.model_validate(doc) for doc in raw])

    async def save_comments(self, comments: CommentList) -> None:
        await self._write(self.comments_file, [comment.to_document() for comment in comments])

    # LIKES
    async def load_likes(self) -> LikeList:
        raw = await self._read_array(self.likes_file)
        return _parse(self.likes_file, lambda: [Like.model_validate(doc) for doc in raw])

    async def save_likes(self, likes: LikeList) -> None:
        await self._write(self.likes_file, [like.to_document() for like in likes])

    async def _read_array(self, path: Path) -> list[Any]:
        raw = await self._read(path, default=[])
        if not isinstance(raw, list):
            raise StorageUnavailable(f"{path.name} must hold a JSON array")
        return raw

    async def _read(self, path: Path, default: Any) -> Any:
        return await asyncio.to_thread(_read_json, path, default)

    async def _write(self, path: Path, payload: Any) -> None:
        await asyncio.to_thread(_write_json_atomic, path, payload)


def _parse(path: Path, build: Callable[[], T]) -> T:
    try:
        return build()
    except ValidationError as err:
        logger.error("Malformed record in %s: %s", path, err)
        raise StorageUnavailable(f"Malformed record in {path.name}") from err


def _read_json(path: Path, default: Any) -> Any:
    if not path.exists():
        return default
    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except json.JSONDecodeError as err:
        logger.error("Malformed JSON in %s: %s", path, err)
        raise StorageUnavailable(f"Malformed JSON in {path.name}") from err
    except OSError as err:
        logger.error("Failed to read %s: %s", path, err)
        raise StorageUnavailable(f"Failed to read {path.name}") from err


def _write_json_atomic(path: Path, payload: Any) -> None:
    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            tmp_name = handle.name
            json.dump(payload, handle, indent=2, ensure_ascii=False)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as err:
        logger.error("Failed to write %s: %s", path, err)
        raise StorageUnavailable(f"Failed to write {path.name}") from err
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
