"""Follower/following relationships layered on user records."""
from __future__ import annotations

import logging

from agora.core.errors import NotFound, ValidationError
from agora.repositories import UserRecord, UserRepository
from agora.schemas import UserProfile, UserRef, UserSummary

logger = logging.getLogger(__name__)


class SocialGraph:
    """Toggle and query follow relationships."""

    def __init__(self, users: UserRepository) -> None:
        self.users = users

    def toggle_follow(self, actor_id: int, target_id: int) -> bool:
        """Follow ``target_id`` if not yet following, otherwise unfollow.

        The target's follower set is written first, then the actor's
        following list. The writes are independent: if the second one fails
        the relationship is left one-sided and nothing rolls it back.

        Returns:
            True if the actor now follows the target.

        Raises:
            ValidationError: If the actor tries to follow themselves.
            NotFound: If the target or the actor has no user record. Both are
                checked before either write.
        """
        if actor_id == target_id:
            raise ValidationError("You cannot follow yourself")

        target = self.users.get(target_id)
        if target is None:
            raise NotFound("User not found")
        if self.users.get(actor_id) is None:
            raise NotFound("User not found")

        now_following = actor_id not in target.followers
        self.users.set_follower(target_id, actor_id, now_following)
        self.users.set_following(actor_id, target_id, now_following)

        logger.info(
            "User %d %s user %d",
            actor_id,
            "followed" if now_following else "unfollowed",
            target_id,
        )
        return now_following

    @staticmethod
    def is_following(viewer_id: int | None, author: UserRecord | None) -> bool:
        """Return True if ``viewer_id`` is among ``author``'s followers."""
        if viewer_id is None or author is None:
            return False
        return viewer_id in author.followers

    def directory(self) -> list[UserSummary]:
        """List every user with raw follower and following ids."""
        return [
            UserSummary(
                id=user.id,
                username=user.username,
                followers=list(user.followers),
                following=list(user.following),
            )
            for user in self.users.list()
        ]

    def profile(self, user_id: int) -> UserProfile:
        """Return a user with follower and following usernames resolved."""
        user = self.users.get(user_id)
        if user is None:
            raise NotFound("User not found")
        return UserProfile(
            id=user.id,
            username=user.username,
            followers=self._refs(user.followers),
            following=self._refs(user.following),
        )

    def _refs(self, user_ids: list[int]) -> list[UserRef]:
        refs: list[UserRef] = []
        for other_id in user_ids:
            other = self.users.get(other_id)
            if other is not None:
                refs.append(UserRef(id=other.id, username=other.username))
        return refs
