# src/startup_feed/models/user.py
"""User accounts keyed by email address."""

from datetime import datetime
from enum import Enum

from pydantic import AliasChoices, Field

from .base import Record, utcnow


class UserTier(str, Enum):
    """Subscription tier of an account."""

    NONE = "none"
    DEMO = "demo"
    PREMIUM = "premium"


class User(Record):
    """Registered member of the feed.

    The email is the identity key; `id` is a numeric handle kept for
    clients that display it.
    """

    email: str
    id: int
    name: str
    # Opaque to the storage layer; the account service stores a bcrypt hash here.
    password: str = ""
    verified: bool = False
    tier: UserTier = UserTier.NONE
    banned: bool = False
    # Accounts exported by the legacy service spell this "registeredAt".
    registered_at: datetime = Field(
        default_factory=utcnow,
        validation_alias=AliasChoices("registered_at", "registeredAt"),
    )
    profile_picture: str | None = None
