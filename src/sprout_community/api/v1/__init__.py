# src/sprout_community/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import comments_router, posts_router, users_router

__all__ = [
    "comments_router",
    "posts_router",
    "users_router",
]
