"""SQLAlchemy-backed repositories.

Every mutating call commits on its own, so a service that issues two writes
gets two independent transactions.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from agora.core.errors import Conflict, InternalError, NotFound
from agora.db.time import as_utc
from agora.models import Post, PostComment, PostLike, User, UserFollower, UserFollowing
from agora.repositories.base import (
    CommentRecord,
    PostRecord,
    PostRepository,
    UserRecord,
    UserRepository,
)

__all__ = ["SqlPostRepository", "SqlUserRepository"]

logger = logging.getLogger(__name__)

_EDITABLE_POST_FIELDS = ("title", "description", "image")


def _commit(session: Session) -> None:
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise
    except SQLAlchemyError as err:
        session.rollback()
        logger.error("Database commit failed: %s", err, exc_info=True)
        raise InternalError("Storage failure") from err


def _to_user_record(user: User) -> UserRecord:
    return UserRecord(
        id=user.id,
        username=user.username,
        password_hash=user.password_hash,
        followers=[link.follower_id for link in user.follower_links],
        following=[link.followed_id for link in user.following_links],
        created_at=as_utc(user.created_at) if user.created_at else None,
    )


def _to_comment_record(comment: PostComment) -> CommentRecord:
    return CommentRecord(
        user_id=comment.user_id,
        body=comment.body,
        created_at=as_utc(comment.created_at) if comment.created_at else None,
    )


def _to_post_record(post: Post) -> PostRecord:
    return PostRecord(
        id=post.id,
        author_id=post.author_id,
        title=post.title,
        description=post.description,
        image=post.image or "",
        created_at=as_utc(post.created_at),
        likes=[like.user_id for like in post.likes],
        comments=[_to_comment_record(c) for c in post.comments],
    )


class SqlUserRepository(UserRepository):
    """User repository over a synchronous SQLAlchemy session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def _require(self, user_id: int) -> User:
        user = self.session.get(User, user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    def add(self, username: str, password_hash: str) -> UserRecord:
        user = User(username=username, password_hash=password_hash)
        self.session.add(user)
        try:
            _commit(self.session)
        except IntegrityError as err:
            raise Conflict("Username is already taken") from err
        self.session.refresh(user)
        return _to_user_record(user)

    def get(self, user_id: int) -> UserRecord | None:
        user = self.session.get(User, user_id)
        return _to_user_record(user) if user is not None else None

    def get_by_username(self, username: str) -> UserRecord | None:
        user = self.session.scalars(select(User).where(User.username == username)).first()
        return _to_user_record(user) if user is not None else None

    def list(self) -> list[UserRecord]:
        users = self.session.scalars(select(User).order_by(User.id)).all()
        return [_to_user_record(u) for u in users]

    def set_follower(self, user_id: int, follower_id: int, present: bool) -> UserRecord:
        user = self._require(user_id)
        link = next(
            (row for row in user.follower_links if row.follower_id == follower_id), None
        )
        if present and link is None:
            user.follower_links.append(UserFollower(follower_id=follower_id))
        elif not present and link is not None:
            user.follower_links.remove(link)
        _commit(self.session)
        self.session.refresh(user)
        return _to_user_record(user)

    def set_following(self, user_id: int, followed_id: int, present: bool) -> UserRecord:
        user = self._require(user_id)
        link = next(
            (row for row in user.following_links if row.followed_id == followed_id), None
        )
        if present and link is None:
            user.following_links.append(UserFollowing(followed_id=followed_id))
        elif not present and link is not None:
            user.following_links.remove(link)
        _commit(self.session)
        self.session.refresh(user)
        return _to_user_record(user)


class SqlPostRepository(PostRepository):
    """Post repository over a synchronous SQLAlchemy session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def _require(self, post_id: int) -> Post:
        post = self.session.get(Post, post_id)
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
        post = Post(
            author_id=author_id,
            title=title,
            description=description,
            image=image,
            created_at=created_at,
        )
        self.session.add(post)
        _commit(self.session)
        self.session.refresh(post)
        return _to_post_record(post)

    def get(self, post_id: int) -> PostRecord | None:
        post = self.session.get(Post, post_id)
        return _to_post_record(post) if post is not None else None

    def list(self) -> list[PostRecord]:
        posts = self.session.scalars(select(Post).order_by(Post.id.desc())).all()
        return [_to_post_record(p) for p in posts]

    def set_like(self, post_id: int, user_id: int, present: bool) -> PostRecord:
        post = self._require(post_id)
        like = next((row for row in post.likes if row.user_id == user_id), None)
        if present and like is None:
            post.likes.append(PostLike(user_id=user_id))
        elif not present and like is not None:
            post.likes.remove(like)
        _commit(self.session)
        self.session.refresh(post)
        return _to_post_record(post)

    def append_comment(
        self, post_id: int, user_id: int, body: str, created_at: datetime
    ) -> CommentRecord:
        post = self._require(post_id)
        comment = PostComment(user_id=user_id, body=body, created_at=created_at)
        post.comments.append(comment)
        _commit(self.session)
        self.session.refresh(comment)
        return _to_comment_record(comment)

    def update(self, post_id: int, fields: dict[str, Any]) -> PostRecord:
        post = self._require(post_id)
        for key in _EDITABLE_POST_FIELDS:
            if key in fields:
                setattr(post, key, fields[key])
        _commit(self.session)
        self.session.refresh(post)
        return _to_post_record(post)
