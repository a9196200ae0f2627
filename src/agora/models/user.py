# src/agora/models/user.py
"""SQLAlchemy models for user accounts and follow relationships."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from agora.db.session import Base
from agora.db.time import utcnow


class User(Base):
    """Registered identity with its password hash."""

    __tablename__ = "user_account"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    follower_links: Mapped[list[UserFollower]] = relationship(
        "UserFollower",
        foreign_keys="UserFollower.user_id",
        cascade="all, delete-orphan",
        order_by="UserFollower.follower_id",
    )
    following_links: Mapped[list[UserFollowing]] = relationship(
        "UserFollowing",
        foreign_keys="UserFollowing.user_id",
        cascade="all, delete-orphan",
        order_by="UserFollowing.followed_id",
    )


class UserFollower(Base):
    """Membership of ``follower_id`` in the followers set of ``user_id``."""

    __tablename__ = "user_follower"

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
    )
    follower_id: Mapped[int] = mapped_column(Integer, primary_key=True)


class UserFollowing(Base):
    """Actor-side mirror of a follow, written separately from ``UserFollower``."""

    __tablename__ = "user_following"

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
    )
    followed_id: Mapped[int] = mapped_column(Integer, primary_key=True)
