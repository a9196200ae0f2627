"""Storage-agnostic records and repository interfaces.

Services only talk to :class:`UserRepository` and :class:`PostRepository`, so
the backing store (process memory or a SQL database) can be swapped without
touching business logic.
"""
from __future__ import annotations

import abc
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

__all__ = [
    "CommentRecord",
    "PostRecord",
    "PostRepository",
    "UserRecord",
    "UserRepository",
]


@dataclass
class UserRecord:
    """Stored user identity. ``password_hash`` never leaves the service layer."""

    id: int
    username: str
    password_hash: str
    followers: list[int] = field(default_factory=list)
    following: list[int] = field(default_factory=list)
    created_at: datetime | None = None


@dataclass
class CommentRecord:
    user_id: int
    body: str
    created_at: datetime | None = None


@dataclass
class PostRecord:
    """Stored post with its like set and embedded comments."""

    id: int
    author_id: int
    title: str
    description: str
    image: str
    created_at: datetime
    likes: list[int] = field(default_factory=list)
    comments: list[CommentRecord] = field(default_factory=list)


class UserRepository(abc.ABC):
    """Credential store: create, find and update user records."""

    @abc.abstractmethod
    def add(self, username: str, password_hash: str) -> UserRecord:
        """Persist a new user with empty follower and following sets."""

    @abc.abstractmethod
    def get(self, user_id: int) -> UserRecord | None:
        """Return a user by identifier."""

    @abc.abstractmethod
    def get_by_username(self, username: str) -> UserRecord | None:
        """Return a user by exact, case-sensitive username."""

    @abc.abstractmethod
    def list(self) -> list[UserRecord]:
        """Return every user in creation order."""

    @abc.abstractmethod
    def set_follower(self, user_id: int, follower_id: int, present: bool) -> UserRecord:
        """Add or remove ``follower_id`` from the followers of ``user_id``."""

    @abc.abstractmethod
    def set_following(self, user_id: int, followed_id: int, present: bool) -> UserRecord:
        """Add or remove ``followed_id`` from the following list of ``user_id``."""


class PostRepository(abc.ABC):
    """Post store: create, find and update posts."""

    @abc.abstractmethod
    def add(
        self,
        *,
        author_id: int,
        title: str,
        description: str,
        image: str,
        created_at: datetime,
    ) -> PostRecord:
        """Persist a new post with no likes and no comments."""

    @abc.abstractmethod
    def get(self, post_id: int) -> PostRecord | None:
        """Return a post by identifier."""

    @abc.abstractmethod
    def list(self) -> list[PostRecord]:
        """Return every post, newest insertion first."""

    @abc.abstractmethod
    def set_like(self, post_id: int, user_id: int, present: bool) -> PostRecord:
        """Add or remove ``user_id`` from the like set of a post."""

    @abc.abstractmethod
    def append_comment(
        self, post_id: int, user_id: int, body: str, created_at: datetime
    ) -> CommentRecord:
        """Append a comment to the end of a post's comment sequence."""

    @abc.abstractmethod
    def update(self, post_id: int, fields: dict[str, Any]) -> PostRecord:
        """Overwrite the supplied post fields and leave the rest untouched."""
