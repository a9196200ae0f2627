# src/agora/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .common import ApiModel, ErrorResponse, MessageResponse
from .post import CommentCreate, CommentResponse, CommentView, PostCreate, PostUpdate, PostView
from .user import (
    FollowResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    UserProfile,
    UserRef,
    UserSummary,
)

__all__ = [
    "ApiModel", "ErrorResponse", "MessageResponse",
    "CommentCreate", "CommentResponse", "CommentView",
    "PostCreate", "PostUpdate", "PostView",
    "FollowResponse", "LoginRequest", "LoginResponse", "RegisterRequest",
    "UserProfile", "UserRef", "UserSummary",
]
