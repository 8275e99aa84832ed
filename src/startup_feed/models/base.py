# src/startup_feed/models/base.py
"""Shared base for persisted record types."""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


class Record(BaseModel):
    """Base class for every record the store persists.

    Unknown keys found in stored documents (for example MongoDB's `_id`)
    are dropped when a record is parsed.
    """

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    def to_document(self) -> dict[str, Any]:
        """Return the JSON-compatible mapping written to either backend."""
        return self.model_dump(mode="json")
