# src/agora/models/post.py
"""SQLAlchemy models for posts, likes and comments."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from agora.db.session import Base
from agora.db.time import utcnow


class Post(Base):
    """Primary content entity produced by users."""

    __tablename__ = "post"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Not a foreign key: the author reference is checked at creation time only.
    author_id: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    # Base64 data URL or any other opaque text; empty when no image was sent.
    image: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    likes: Mapped[list[PostLike]] = relationship(
        "PostLike",
        cascade="all, delete-orphan",
        order_by="PostLike.user_id",
    )
    comments: Mapped[list[PostComment]] = relationship(
        "PostComment",
        cascade="all, delete-orphan",
        order_by="PostComment.id",
    )


class PostLike(Base):
    """Per-user like on a post.

    The composite primary key prevents duplicate likes from the same user.
    """

    __tablename__ = "post_like"

    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[int] = mapped_column(Integer, primary_key=True)


class PostComment(Base):
    """Append-only comment attached to a post."""

    __tablename__ = "post_comment"
    __table_args__ = (Index("ix_post_comment_post_id", "post_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
