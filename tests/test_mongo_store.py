# tests/test_mongo_store.py
"""Tests for the MongoDB backend against motor collection doubles."""

from unittest.mock import MagicMock

import pytest
from pymongo import UpdateOne
from pymongo.errors import AutoReconnect, BulkWriteError

from startup_feed.core.errors import StorageUnavailable
from startup_feed.models import Like, Post, SubjectType
from startup_feed.storage import BackendMode, MongoRecordStore


@pytest.fixture
def mongo_store(mongo_database) -> MongoRecordStore:
    return MongoRecordStore(mongo_database)


def _serve(collection: MagicMock, docs: list[dict]) -> None:
    collection.find.return_value.to_list.return_value = docs
    collection.estimated_document_count.return_value = len(docs)


@pytest.mark.asyncio
async def test_load_users_returns_mapping_keyed_by_email(mongo_store, mongo_collections) -> None:
    _serve(
        mongo_collections["users"],
        [{"email": "a@x.io", "id": 1, "name": "A"}, {"email": "b@x.io", "id": 2, "name": "B"}],
    )

    users = await mongo_store.load_users()

    assert mongo_store.mode is BackendMode.DOCUMENT
    assert set(users) == {"a@x.io", "b@x.io"}
    assert users["b@x.io"].name == "B"
    mongo_collections["users"].find.assert_called_once_with({}, {"_id": 0})


@pytest.mark.asyncio
async def test_load_orders_by_time_not_by_stored_text(mongo_store, mongo_collections) -> None:
    # Whole-second timestamps are serialized without a fraction, so the
    # earlier post would come first in a descending text sort.
    _serve(
        mongo_collections["posts"],
        [
            {"id": 1, "user_email": "a@x.io", "user_name": "A", "created_at": "2024-01-01T10:00:00Z"},
            {"id": 2, "user_email": "a@x.io", "user_name": "A", "created_at": "2024-01-01T10:00:00.500000Z"},
        ],
    )
    _serve(
        mongo_collections["comments"],
        [
            {"id": 8, "post_id": 2, "user_email": "b@x.io", "user_name": "B",
             "created_at": "2024-01-01T10:00:01.250000Z"},
            {"id": 7, "post_id": 2, "user_email": "b@x.io", "user_name": "B",
             "created_at": "2024-01-01T10:00:01Z"},
        ],
    )

    posts = await mongo_store.load_posts()
    comments = await mongo_store.load_comments()

    assert [p.id for p in posts] == [2, 1]
    assert [c.id for c in comments] == [7, 8]
    mongo_collections["posts"].find.assert_called_once_with({}, {"_id": 0})


@pytest.mark.asyncio
async def test_save_users_upserts_each_email(mongo_store, mongo_collections, author, other_user) -> None:
    await mongo_store.save_users({author.email: author, other_user.email: other_user})

    bulk_write = mongo_collections["users"].bulk_write
    bulk_write.assert_awaited_once()
    operations = bulk_write.call_args.args[0]
    assert len(operations) == 2
    assert all(isinstance(op, UpdateOne) for op in operations)
    mongo_collections["users"].delete_many.assert_not_awaited()


@pytest.mark.asyncio
async def test_save_posts_deletes_all_then_inserts_all(mongo_store, mongo_collections) -> None:
    calls: list[str] = []
    posts = mongo_collections["posts"]
    posts.delete_many.side_effect = lambda *a, **k: calls.append("delete")
    posts.insert_many.side_effect = lambda *a, **k: calls.append("insert")

    await mongo_store.save_posts([Post(id=1, user_email="a@x.io", user_name="A", content="x")])

    assert calls == ["delete", "insert"]
    inserted = posts.insert_many.call_args.args[0]
    assert inserted[0]["id"] == 1


@pytest.mark.asyncio
async def test_save_empty_collection_only_deletes(mongo_store, mongo_collections) -> None:
    await mongo_store.save_comments([])

    mongo_collections["comments"].delete_many.assert_awaited_once_with({})
    mongo_collections["comments"].insert_many.assert_not_awaited()


@pytest.mark.asyncio
async def test_driver_errors_surface_as_storage_unavailable(mongo_store, mongo_collections) -> None:
    mongo_collections["posts"].find.return_value.to_list.side_effect = AutoReconnect("gone")
    mongo_collections["comments"].delete_many.side_effect = AutoReconnect("gone")

    with pytest.raises(StorageUnavailable):
        await mongo_store.load_posts()
    with pytest.raises(StorageUnavailable):
        await mongo_store.save_comments([])


@pytest.mark.asyncio
async def test_duplicate_like_rejected_by_unique_index_is_not_an_error(
    mongo_store, mongo_collections
) -> None:
    mongo_collections["likes"].insert_many.side_effect = BulkWriteError(
        {"writeErrors": [{"index": 1, "code": 11000, "errmsg": "duplicate key"}]}
    )
    like = Like(subject_type=SubjectType.POST, subject_id=1, user_email="a@x.io")

    await mongo_store.save_likes([like, like])


@pytest.mark.asyncio
async def test_other_bulk_errors_on_likes_are_raised(mongo_store, mongo_collections) -> None:
    mongo_collections["likes"].insert_many.side_effect = BulkWriteError(
        {"writeErrors": [{"index": 0, "code": 121, "errmsg": "validation failed"}]}
    )
    like = Like(subject_type=SubjectType.POST, subject_id=1, user_email="a@x.io")

    with pytest.raises(StorageUnavailable):
        await mongo_store.save_likes([like])


@pytest.mark.asyncio
async def test_ensure_indexes_creates_unique_constraints(mongo_store, mongo_collections) -> None:
    await mongo_store.ensure_indexes()

    mongo_collections["users"].create_index.assert_awaited_once_with("email", unique=True)
    mongo_collections["posts"].create_index.assert_awaited_once_with("id", unique=True)
    mongo_collections["comments"].create_index.assert_awaited_once_with("id", unique=True)
    args, kwargs = mongo_collections["likes"].create_index.call_args
    assert [field for field, _ in args[0]] == ["subject_type", "subject_id", "user_email"]
    assert kwargs == {"unique": True}


@pytest.mark.asyncio
async def test_migration_only_fills_empty_collections(
    mongo_store, mongo_collections, store, registered_users
) -> None:
    await store.save_posts([Post(id=1, user_email="a@x.io", user_name="A", content="x")])
    _serve(mongo_collections["posts"], [{"id": 9, "user_email": "b@x.io", "user_name": "B"}])

    migrated = await mongo_store.migrate_from(store)

    assert migrated["users"] == len(registered_users)
    assert "posts" not in migrated
    mongo_collections["users"].insert_many.assert_awaited_once()
    mongo_collections["posts"].insert_many.assert_not_awaited()
    mongo_collections["posts"].delete_many.assert_not_awaited()


@pytest.mark.asyncio
async def test_migration_skips_unreadable_files(mongo_store, mongo_collections, store) -> None:
    store.data_dir.mkdir(parents=True)
    store.posts_file.write_text("{broken", encoding="utf-8")

    migrated = await mongo_store.migrate_from(store)

    assert "posts" not in migrated
    mongo_collections["posts"].insert_many.assert_not_awaited()


@pytest.mark.asyncio
async def test_close_closes_the_client(mongo_database) -> None:
    client = MagicMock()
    mongo_store = MongoRecordStore(mongo_database, client=client)

    await mongo_store.close()

    client.close.assert_called_once_with()


@pytest.mark.asyncio
async def test_counts_reports_every_collection(mongo_store, mongo_collections) -> None:
    _serve(mongo_collections["likes"], [{"subject_type": "post", "subject_id": 1, "user_email": "a"}])

    counts = await mongo_store.counts()

    assert counts == {"users": 0, "posts": 0, "comments": 0, "likes": 1}
