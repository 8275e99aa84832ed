"""Shared API dependencies for storage access and authentication."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from startup_feed.core.security import decode_access_token
from startup_feed.core.settings import Settings, settings
from startup_feed.models import User
from startup_feed.services.feed import FeedAssembler, FeedSeeder, NoSeeder
from startup_feed.services.rules import is_admin
from startup_feed.storage import RecordStore

# HTTP Bearer schemes; the optional one lets anonymous visitors read the feed
bearer_scheme = HTTPBearer()
optional_bearer_scheme = HTTPBearer(auto_error=False)


def get_settings() -> Settings:
    """Return the application settings."""
    return settings


def get_store(request: Request) -> RecordStore:
    """Return the record store chosen at startup.

    Raises:
        HTTPException: If storage has not been selected yet.
    """
    store: RecordStore | None = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Storage is not ready",
        )
    return store


def get_seeder(request: Request) -> FeedSeeder:
    """Return the sample-post strategy chosen at startup."""
    return getattr(request.app.state, "seeder", None) or NoSeeder()


SettingsDep = Annotated[Settings, Depends(get_settings)]
StoreDep = Annotated[RecordStore, Depends(get_store)]


def get_feed_assembler(
    store: StoreDep,
    seeder: Annotated[FeedSeeder, Depends(get_seeder)],
) -> FeedAssembler:
    """Build a feed assembler over the active store."""
    return FeedAssembler(store, seeder)


async def _resolve_user(token: str, store: RecordStore, config: Settings) -> User:
    email = decode_access_token(token, config)
    if email is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )
    user = (await store.load_users()).get(email)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    store: StoreDep,
    config: SettingsDep,
) -> User:
    """Get the current authenticated user from the bearer token.

    Raises:
        HTTPException: If the token is invalid or the user is unknown.
    """
    return await _resolve_user(credentials.credentials, store, config)


async def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(optional_bearer_scheme)],
    store: StoreDep,
    config: SettingsDep,
) -> User | None:
    """Return the authenticated user, or None for anonymous requests."""
    if credentials is None:
        return None
    return await _resolve_user(credentials.credentials, store, config)


CurrentUserDep = Annotated[User, Depends(get_current_user)]
OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]


def require_admin(current_user: CurrentUserDep, config: SettingsDep) -> User:
    """Allow only the configured administrator through."""
    if not is_admin(current_user, config):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user


AdminUserDep = Annotated[User, Depends(require_admin)]
FeedAssemblerDep = Annotated[FeedAssembler, Depends(get_feed_assembler)]
