# src/startup_feed/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    admin_router,
    comments_router,
    posts_router,
    system_router,
    users_router,
)

__all__ = [
    "admin_router",
    "comments_router",
    "posts_router",
    "system_router",
    "users_router",
]
