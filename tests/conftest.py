# tests/conftest.py
from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

os.environ.setdefault("PYTEST_RUNNING", "true")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["MONGODB_URI"] = ""
os.environ["SEED_SAMPLE_POSTS"] = "false"
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="startup-feed-"))

from startup_feed.api.v1.dependencies import get_seeder, get_settings, get_store
from startup_feed.core.security import create_access_token
from startup_feed.core.settings import Settings
from startup_feed.main import app as fastapi_app
from startup_feed.models import User
from startup_feed.services.feed import NoSeeder
from startup_feed.storage import FileRecordStore

ADMIN_EMAIL = "admin@startup.com"
_BASE_TIME = datetime(2024, 1, 1, tzinfo=UTC)


def _user(email: str, name: str, user_id: int, **extra: object) -> User:
    return User(
        email=email,
        id=user_id,
        name=name,
        registered_at=_BASE_TIME + timedelta(minutes=user_id),
        **extra,
    )


@pytest.fixture()
def test_settings(tmp_path: Path) -> Settings:
    """Settings pointing at a per-test data directory."""
    return Settings(
        secret_key="test-secret-key",
        data_dir=tmp_path / "data",
        admin_email=ADMIN_EMAIL,
        mongodb_uri=None,
        seed_sample_posts=False,
    )


@pytest.fixture()
def store(test_settings: Settings) -> FileRecordStore:
    """Flat-file store rooted in the test's temporary directory."""
    return FileRecordStore(test_settings.data_dir)


@pytest.fixture()
def author() -> User:
    return _user("author@startup.com", "Author", 1)


@pytest.fixture()
def other_user() -> User:
    return _user("other@startup.com", "Other", 2)


@pytest.fixture()
def admin_user() -> User:
    return _user(ADMIN_EMAIL, "Admin", 3)


@pytest.fixture()
def banned_user() -> User:
    return _user("banned@startup.com", "Banned", 4, banned=True)


@pytest.fixture()
def registered_users(
    store: FileRecordStore,
    author: User,
    other_user: User,
    admin_user: User,
    banned_user: User,
) -> dict[str, User]:
    """Write the standard users straight into the users file."""
    users = {u.email: u for u in (author, other_user, admin_user, banned_user)}
    store.data_dir.mkdir(parents=True, exist_ok=True)
    store.users_file.write_text(
        json.dumps({email: u.to_document() for email, u in users.items()}),
        encoding="utf-8",
    )
    return users


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture()
def client(
    app: FastAPI,
    store: FileRecordStore,
    test_settings: Settings,
) -> Iterator[TestClient]:
    """API client whose storage and settings are the per-test ones."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_seeder] = NoSeeder
    app.dependency_overrides[get_settings] = lambda: test_settings
    try:
        with TestClient(app, base_url="http://test") as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers(test_settings: Settings):
    """Return a builder of bearer headers for a user."""

    def _headers(user: User) -> dict[str, str]:
        token = create_access_token(user.email, test_settings)
        return {"Authorization": f"Bearer {token}"}

    return _headers


def make_collection(docs: list[dict] | None = None) -> MagicMock:
    """Build a motor collection double serving `docs` from `find`."""
    docs = list(docs or [])
    collection = MagicMock()
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=docs)
    collection.find.return_value = cursor
    collection.delete_many = AsyncMock()
    collection.insert_many = AsyncMock()
    collection.bulk_write = AsyncMock()
    collection.create_index = AsyncMock()
    collection.estimated_document_count = AsyncMock(return_value=len(docs))
    return collection


@pytest.fixture()
def mongo_collections() -> dict[str, MagicMock]:
    return {name: make_collection() for name in ("users", "posts", "comments", "likes")}


@pytest.fixture()
def mongo_database(mongo_collections: dict[str, MagicMock]) -> MagicMock:
    database = MagicMock()
    database.__getitem__.side_effect = mongo_collections.__getitem__
    return database
