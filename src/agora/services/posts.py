"""Service-level helpers for posts, likes and comments."""
from __future__ import annotations

import logging
from typing import Any

from agora.core.errors import Forbidden, NotFound, ValidationError
from agora.db.time import utcnow
from agora.repositories import PostRecord, PostRepository, UserRepository
from agora.schemas import CommentResponse, CommentView
from agora.services.feed import FeedAssembler

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("title", "description", "image")


class PostService:
    """Create, list, like, comment on and edit posts."""

    def __init__(
        self,
        posts: PostRepository,
        users: UserRepository,
        feed: FeedAssembler | None = None,
    ) -> None:
        self.posts = posts
        self.users = users
        self.feed = feed or FeedAssembler(users)

    def create(
        self,
        author_id: int,
        title: str | None,
        description: str | None,
        image: str | None = None,
    ) -> PostRecord:
        """Create a post authored by ``author_id``.

        Raises:
            ValidationError: If ``title`` or ``description`` is empty or absent.
        """
        if not title or not description:
            raise ValidationError("Missing required fields: title, description")

        post = self.posts.add(
            author_id=author_id,
            title=title,
            description=description,
            image=image or "",
            created_at=utcnow(),
        )
        logger.info("User %d created post %d", author_id, post.id)
        return post

    def list(self) -> list[PostRecord]:
        """Return all posts, newest first.

        Posts created in the same instant fall back to id order, which follows
        insertion order since ids are monotonic.
        """
        return sorted(
            self.posts.list(),
            key=lambda post: (post.created_at, post.id),
            reverse=True,
        )

    def get(self, post_id: int) -> PostRecord:
        post = self.posts.get(post_id)
        if post is None:
            raise NotFound("Post not found")
        return post

    def toggle_like(self, post_id: int, user_id: int) -> PostRecord:
        """Like the post if ``user_id`` has not liked it yet, otherwise unlike it.

        Raises:
            NotFound: If the post does not exist.
        """
        post = self.get(post_id)
        liked = user_id not in post.likes
        updated = self.posts.set_like(post_id, user_id, liked)
        logger.debug("User %d %s post %d", user_id, "liked" if liked else "unliked", post_id)
        return updated

    def add_comment(self, post_id: int | None, user_id: int, body: str | None) -> CommentResponse:
        """Append a comment and return it with the commenter's name resolved.

        Raises:
            NotFound: If the post does not exist.
            ValidationError: If ``body`` is empty or only whitespace.
        """
        if post_id is None:
            raise NotFound("Post not found")
        self.get(post_id)
        if not body or not body.strip():
            raise ValidationError("Comment body cannot be empty")

        comment = self.posts.append_comment(post_id, user_id, body, utcnow())
        logger.debug("User %d commented on post %d", user_id, post_id)
        return CommentResponse(
            user_name=self.feed.display_name(comment.user_id),
            body=comment.body,
        )

    def comments(self, post_id: int) -> list[CommentView]:
        """Return a post's comments in the order they were added."""
        post = self.get(post_id)
        return [self.feed.comment_view(c) for c in post.comments]

    def update(self, post_id: int, author_id: int, fields: dict[str, Any]) -> PostRecord:
        """Apply a partial update on behalf of the post's author.

        Only keys present in ``fields`` change. An explicitly empty string
        overwrites the stored value.

        Raises:
            NotFound: If the post does not exist.
            Forbidden: If ``author_id`` did not write the post.
            ValidationError: If a title or description is explicitly null.
        """
        post = self.get(post_id)
        if post.author_id != author_id:
            raise Forbidden("Only the author can edit this post")

        changes: dict[str, Any] = {}
        for key in EDITABLE_FIELDS:
            if key not in fields:
                continue
            value = fields[key]
            if value is None:
                if key != "image":
                    raise ValidationError(f"Field '{key}' cannot be null")
                value = ""
            changes[key] = value

        updated = self.posts.update(post_id, changes)
        logger.info("User %d edited post %d (%s)", author_id, post_id, ", ".join(changes) or "no changes")
        return updated
