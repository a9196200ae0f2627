"""Compose stored posts with user lookups into client-facing views."""
from __future__ import annotations

from collections.abc import Iterable

from agora.core.settings import settings
from agora.repositories import CommentRecord, PostRecord, UserRepository
from agora.schemas import CommentView, PostView
from agora.services.social_graph import SocialGraph


class FeedAssembler:
    """Build :class:`PostView` objects for a given viewer."""

    def __init__(
        self,
        users: UserRepository,
        graph: SocialGraph | None = None,
        *,
        anonymous_name: str | None = None,
    ) -> None:
        self.users = users
        self.graph = graph or SocialGraph(users)
        self.anonymous_name = anonymous_name or settings.anonymous_author_name

    def display_name(self, user_id: int) -> str:
        """Return the username for ``user_id`` or the anonymous placeholder."""
        user = self.users.get(user_id)
        return user.username if user is not None else self.anonymous_name

    def comment_view(self, comment: CommentRecord) -> CommentView:
        return CommentView(
            user_id=comment.user_id,
            user_name=self.display_name(comment.user_id),
            body=comment.body,
        )

    def view(self, post: PostRecord, viewer_id: int | None) -> PostView:
        """Denormalize one post from the point of view of ``viewer_id``."""
        author = self.users.get(post.author_id)
        return PostView(
            id=post.id,
            author=author.username if author is not None else self.anonymous_name,
            author_id=author.id if author is not None else None,
            title=post.title,
            description=post.description,
            image=post.image,
            likes=list(post.likes),
            likes_count=len(post.likes),
            comments=[self.comment_view(c) for c in post.comments],
            created_at=post.created_at,
            is_following_author=self.graph.is_following(viewer_id, author),
        )

    def assemble(self, posts: Iterable[PostRecord], viewer_id: int | None) -> list[PostView]:
        """Denormalize ``posts`` keeping their order."""
        return [self.view(post, viewer_id) for post in posts]
