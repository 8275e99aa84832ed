# src/startup_feed/api/v1/endpoints/admin.py
"""Administrator endpoints."""

from fastapi import APIRouter

from startup_feed.schemas.user import BanRequest, UserListResponse, UserResponse
from startup_feed.services import user_service

from ..dependencies import AdminUserDep, SettingsDep, StoreDep
from .users import to_public

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/users", response_model=UserListResponse)
async def list_users(store: StoreDep, _admin: AdminUserDep, config: SettingsDep) -> UserListResponse:
    """Return every account in registration order."""
    users = await user_service.list_users(store)
    return UserListResponse(users=[to_public(user, config) for user in users])


@router.post("/ban/{user_email}", response_model=UserResponse)
async def ban_user(
    user_email: str,
    payload: BanRequest,
    store: StoreDep,
    _admin: AdminUserDep,
    config: SettingsDep,
) -> UserResponse:
    """Ban or unban an account."""
    user = await user_service.set_banned(store, user_email, payload.banned)
    verb = "banned" if payload.banned else "unbanned"
    return UserResponse(message=f"User {verb} successfully", user=to_public(user, config))
