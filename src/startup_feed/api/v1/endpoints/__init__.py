# src/startup_feed/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .admin import router as admin_router
from .comments import router as comments_router
from .posts import router as posts_router
from .system import router as system_router
from .users import router as users_router

__all__ = [
    "admin_router",
    "comments_router",
    "posts_router",
    "system_router",
    "users_router",
]
