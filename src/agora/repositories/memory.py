"""Process-local repositories backed by plain Python lists.

State lives for the lifetime of the process. Nothing here takes a lock:
concurrent read-modify-write cycles on the same record race and the last
write wins.
"""
from __future__ import annotations

import copy
from datetime import datetime
from itertools import count
from typing import Any

from agora.core.errors import NotFound
from agora.db.time import utcnow
from agora.repositories.base import (
    CommentRecord,
    PostRecord,
    PostRepository,
    UserRecord,
    UserRepository,
)

__all__ = ["MemoryStore", "MemoryPostRepository", "MemoryUserRepository", "memory_store"]

_EDITABLE_POST_FIELDS = ("title", "description", "image")


class MemoryStore:
    """Holds the users and posts lists plus their id counters."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Drop all data and restart the id counters at 1."""
        self.users: list[UserRecord] = []
        self.posts: list[PostRecord] = []
        self._user_ids = count(1)
        self._post_ids = count(1)

    def next_user_id(self) -> int:
        return next(self._user_ids)

    def next_post_id(self) -> int:
        return next(self._post_ids)


def _toggle_member(members: list[int], member: int, present: bool) -> None:
    if present and member not in members:
        members.append(member)
    elif not present and member in members:
        members.remove(member)


class MemoryUserRepository(UserRepository):
    """User repository over a :class:`MemoryStore`."""

    def __init__(self, store: MemoryStore) -> None:
        self.store = store

    def _find(self, user_id: int) -> UserRecord | None:
        return next((u for u in self.store.users if u.id == user_id), None)

    def _require(self, user_id: int) -> UserRecord:
        user = self._find(user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    def add(self, username: str, password_hash: str) -> UserRecord:
        user = UserRecord(
            id=self.store.next_user_id(),
            username=username,
            password_hash=password_hash,
            created_at=utcnow(),
        )
        self.store.users.append(user)
        return copy.deepcopy(user)

    def get(self, user_id: int) -> UserRecord | None:
        user = self._find(user_id)
        return copy.deepcopy(user) if user is not None else None

    def get_by_username(self, username: str) -> UserRecord | None:
        user = next((u for u in self.store.users if u.username == username), None)
        return copy.deepcopy(user) if user is not None else None

    def list(self) -> list[UserRecord]:
        return copy.deepcopy(self.store.users)

    def set_follower(self, user_id: int, follower_id: int, present: bool) -> UserRecord:
        user = self._require(user_id)
        _toggle_member(user.followers, follower_id, present)
        return copy.deepcopy(user)

    def set_following(self, user_id: int, followed_id: int, present: bool) -> UserRecord:
        user = self._require(user_id)
        _toggle_member(user.following, followed_id, present)
        return copy.deepcopy(user)


class MemoryPostRepository(PostRepository):
    """Post repository over a :class:`MemoryStore`; newest posts sit at the front."""

    def __init__(self, store: MemoryStore) -> None:
        self.store = store

    def _require(self, post_id: int) -> PostRecord:
        post = next((p for p in self.store.posts if p.id == post_id), None)
        if post is None:
            raise NotFound("Post not found")
        return post

    def add(
        self,
        *,
        author_id: int,
        title: str,
        description: str,
        image: str,
        created_at: datetime,
    ) -> PostRecord:
        post = PostRecord(
            id=self.store.next_post_id(),
            author_id=author_id,
            title=title,
            description=description,
            image=image,
            created_at=created_at,
        )
        self.store.posts.insert(0, post)
        return copy.deepcopy(post)

    def get(self, post_id: int) -> PostRecord | None:
        post = next((p for p in self.store.posts if p.id == post_id), None)
        return copy.deepcopy(post) if post is not None else None

    def list(self) -> list[PostRecord]:
        return copy.deepcopy(self.store.posts)

    def set_like(self, post_id: int, user_id: int, present: bool) -> PostRecord:
        post = self._require(post_id)
        _toggle_member(post.likes, user_id, present)
        return copy.deepcopy(post)

    def append_comment(
        self, post_id: int, user_id: int, body: str, created_at: datetime
    ) -> CommentRecord:
        post = self._require(post_id)
        comment = CommentRecord(user_id=user_id, body=body, created_at=created_at)
        post.comments.append(comment)
        return copy.deepcopy(comment)

    def update(self, post_id: int, fields: dict[str, Any]) -> PostRecord:
        post = self._require(post_id)
        for key in _EDITABLE_POST_FIELDS:
            if key in fields:
                setattr(post, key, fields[key])
        return copy.deepcopy(post)


# Shared process-wide store used when STORAGE_BACKEND=memory.
memory_store = MemoryStore()
