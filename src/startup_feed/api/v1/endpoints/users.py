# src/startup_feed/api/v1/endpoints/users.py
"""Account endpoints: registration, login, verification, profile and tiers."""

from fastapi import APIRouter, status

from startup_feed.core.security import create_access_token
from startup_feed.core.settings import Settings
from startup_feed.models import User, UserTier
from startup_feed.schemas.user import (
    AuthResponse,
    LoginRequest,
    ProfileUpdate,
    RegisterRequest,
    UserPublic,
    UserResponse,
    VerifyEmailRequest,
)
from startup_feed.services import user_service
from startup_feed.services.rules import is_admin

from ..dependencies import CurrentUserDep, SettingsDep, StoreDep

router = APIRouter(tags=["users"])


def to_public(user: User, config: Settings) -> UserPublic:
    """Strip the credential and flag the administrator."""
    return UserPublic.model_validate(
        {**user.model_dump(exclude={"password"}), "is_admin": is_admin(user, config)}
    )


def _auth_response(message: str, user: User, config: Settings) -> AuthResponse:
    return AuthResponse(
        message=message,
        user=to_public(user, config),
        token=create_access_token(user.email, config),
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, store: StoreDep, config: SettingsDep) -> AuthResponse:
    """Create an account and return a bearer token for it."""
    user = await user_service.register_user(store, payload.name, payload.email, payload.password)
    return _auth_response("User created successfully", user, config)


@router.post("/login", response_model=AuthResponse)
async def login(payload: LoginRequest, store: StoreDep, config: SettingsDep) -> AuthResponse:
    """Exchange email and password for a bearer token."""
    user = await user_service.authenticate(store, payload.email, payload.password)
    return _auth_response("Login successful", user, config)


@router.post("/verify-email", response_model=UserResponse)
async def verify_email(
    payload: VerifyEmailRequest, store: StoreDep, config: SettingsDep
) -> UserResponse:
    """Mark an email address as verified.

    No token is issued here; the account signs in through `/login`.
    """
    user = await user_service.verify_email(store, payload.email, payload.verification_code)
    return UserResponse(message="Email verified successfully", user=to_public(user, config))


@router.put("/profile", response_model=UserResponse)
async def update_profile(
    payload: ProfileUpdate,
    store: StoreDep,
    current_user: CurrentUserDep,
    config: SettingsDep,
) -> UserResponse:
    """Update the caller's display name and avatar."""
    user = await user_service.update_profile(
        store, current_user.email, payload.name, payload.profile_picture
    )
    return UserResponse(message="Profile updated successfully", user=to_public(user, config))


@router.post("/activate-demo", response_model=UserResponse)
async def activate_demo(
    store: StoreDep, current_user: CurrentUserDep, config: SettingsDep
) -> UserResponse:
    """Move the caller to the demo tier."""
    user = await user_service.set_tier(store, current_user.email, UserTier.DEMO)
    return UserResponse(message="Demo tier activated successfully", user=to_public(user, config))


@router.post("/upgrade-premium", response_model=UserResponse)
async def upgrade_premium(
    store: StoreDep, current_user: CurrentUserDep, config: SettingsDep
) -> UserResponse:
    """Move the caller to the premium tier."""
    user = await user_service.set_tier(store, current_user.email, UserTier.PREMIUM)
    return UserResponse(
        message="Premium tier activated successfully", user=to_public(user, config)
    )
