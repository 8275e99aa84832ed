"""Persistence backends for users, posts, comments and likes."""

from .base import BackendMode, RecordStore
from .file_store import FileRecordStore
from .mongo_store import MongoRecordStore
from .selector import BackendSelection, determine_mode

__all__ = [
    "BackendMode",
    "BackendSelection",
    "FileRecordStore",
    "MongoRecordStore",
    "RecordStore",
    "determine_mode",
]
