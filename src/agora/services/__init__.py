# src/agora/services/__init__.py
"""Business logic services for the Agora application."""

from .auth import AuthService, LoginResult
from .feed import FeedAssembler
from .posts import PostService
from .social_graph import SocialGraph

__all__ = [
    "AuthService",
    "FeedAssembler",
    "LoginResult",
    "PostService",
    "SocialGraph",
]
