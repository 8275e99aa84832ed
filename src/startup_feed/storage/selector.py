"""Startup selection between the document store and flat files."""
from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from startup_feed.core.errors import StorageUnavailable
from startup_feed.core.settings import Settings

from .base import BackendMode, RecordStore
from .file_store import FileRecordStore
from .mongo_store import MongoRecordStore

__all__ = ["BackendSelection", "determine_mode"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BackendSelection:
    """Outcome of backend selection, fixed for the process lifetime."""

    mode: BackendMode
    store: RecordStore


async def determine_mode(
    config: Settings,
    client_factory: Callable[..., Any] = AsyncIOMotorClient,
) -> BackendSelection:
    """Pick the storage backend for this process.

    Connects to MongoDB when a URI is configured, prepares its indexes and
    copies any flat-file data into empty collections. Every failure along
    the way is a normal outcome that selects flat-file mode instead.

    Args:
        config: Settings providing the URI, database name, timeout and data dir.
        client_factory: Callable building the motor client; replaced in tests.

    Returns:
        The selected mode and a store bound to it.
    """
    file_store = FileRecordStore(config.data_dir)
    if not config.document_store_configured:
        logger.info("MONGODB_URI not set; using flat-file storage in %s", config.data_dir)
        return BackendSelection(BackendMode.FILE, file_store)

    client = None
    try:
        client = client_factory(
            config.mongodb_uri,
            serverSelectionTimeoutMS=config.mongodb_timeout_ms,
            connectTimeoutMS=config.mongodb_timeout_ms,
            socketTimeoutMS=config.mongodb_timeout_ms,
        )
        await client.admin.command("ping")
        store = MongoRecordStore(client[config.mongodb_db], client=client)
        await store.ensure_indexes()
        await store.migrate_from(file_store)
    except (PyMongoError, StorageUnavailable, ValueError, TypeError) as err:
        logger.warning("Document store unavailable (%s); falling back to flat files", err)
        if client is not None:
            client.close()
        return BackendSelection(BackendMode.FILE, file_store)

    logger.info("Using document store database %r", config.mongodb_db)
    return BackendSelection(BackendMode.DOCUMENT, store)
