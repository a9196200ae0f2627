# src/agora/models/__init__.py
"""SQLAlchemy models for the Agora application."""

from .post import Post, PostComment, PostLike
from .user import User, UserFollower, UserFollowing

__all__ = [
    "Post", "PostComment", "PostLike",
    "User", "UserFollower", "UserFollowing",
]
