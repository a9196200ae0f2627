# src/agora/api/__init__.py
"""HTTP API for the Agora application."""

from .endpoints import auth_router, comments_router, posts_router, users_router

__all__ = [
    "auth_router",
    "comments_router",
    "posts_router",
    "users_router",
]
