"""Account operations over the user collection."""
from __future__ import annotations

import logging

from startup_feed.core import security
from startup_feed.core.errors import Conflict, InvalidContent, SubjectNotFound, Unauthorized
from startup_feed.models import User, UserTier
from startup_feed.storage import RecordStore

from .ids import next_record_id

__all__ = [
    "register_user",
    "authenticate",
    "get_user",
    "list_users",
    "verify_email",
    "set_tier",
    "set_banned",
    "update_profile",
]

logger = logging.getLogger(__name__)

VERIFICATION_CODE_LENGTH = 6


async def register_user(store: RecordStore, name: str, email: str, password: str) -> User:
    """Create an unverified account on the `none` tier.

    Raises:
        InvalidContent: If any field is blank.
        Conflict: If the email is already registered.
    """
    name, email = name.strip(), email.strip()
    if not name or not email or not password:
        raise InvalidContent("Name, email, and password are required")

    users = await store.load_users()
    if email in users:
        raise Conflict("User already exists")

    user = User(
        email=email,
        id=next_record_id(u.id for u in users.values()),
        name=name,
        password=security.hash_password(password),
    )
    users[email] = user
    await store.save_users(users)
    logger.info("Registered user %s", email)
    return user


async def authenticate(store: RecordStore, email: str, password: str) -> User:
    """Return the account matching the credentials or raise `Unauthorized`."""
    user = (await store.load_users()).get(email.strip())
    if user is None or not security.verify_password(password, user.password):
        raise Unauthorized("Invalid email or password")
    return user


async def get_user(store: RecordStore, email: str) -> User:
    """Return one account or raise `SubjectNotFound`."""
    user = (await store.load_users()).get(email)
    if user is None:
        raise SubjectNotFound("User not found")
    return user


async def list_users(store: RecordStore) -> list[User]:
    """Return every account in registration order."""
    users = await store.load_users()
    return sorted(users.values(), key=lambda u: (u.registered_at, u.id))


async def _update(store: RecordStore, email: str, **changes: object) -> User:
    users = await store.load_users()
    user = users.get(email)
    if user is None:
        raise SubjectNotFound("User not found")
    for key, value in changes.items():
        setattr(user, key, value)
    await store.save_users(users)
    return user


async def verify_email(store: RecordStore, email: str, verification_code: str | None) -> User:
    """Mark the account's email address as verified.

    Codes are delivered outside this service, so any code of the right
    length is accepted.

    Raises:
        InvalidContent: If the code is missing or not six characters long.
        SubjectNotFound: If no account has `email`.
    """
    if not verification_code or len(verification_code) != VERIFICATION_CODE_LENGTH:
        raise InvalidContent("Invalid verification code")
    return await _update(store, email, verified=True)


async def set_tier(store: RecordStore, email: str, tier: UserTier) -> User:
    """Move the account to `tier`."""
    user = await _update(store, email, tier=tier)
    logger.info("User %s moved to tier %s", email, tier.value)
    return user


async def set_banned(store: RecordStore, email: str, banned: bool) -> User:
    """Ban or unban the account."""
    user = await _update(store, email, banned=banned)
    logger.info("User %s %s", email, "banned" if banned else "unbanned")
    return user


async def update_profile(
    store: RecordStore, email: str, name: str, profile_picture: str | None = None
) -> User:
    """Change the display name and, when given, the avatar."""
    name = name.strip()
    if not name:
        raise InvalidContent("Name is required")
    changes: dict[str, object] = {"name": name}
    if profile_picture:
        changes["profile_picture"] = profile_picture
    return await _update(store, email, **changes)
