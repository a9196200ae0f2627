# tests/services/test_social_graph.py
"""Tests for SocialGraph."""

import pytest

from agora.core.errors import InternalError, NotFound, ValidationError
from agora.repositories import MemoryStore
from agora.repositories.memory import MemoryUserRepository
from agora.services import SocialGraph


@pytest.fixture()
def graph(repositories) -> SocialGraph:
    return SocialGraph(repositories.users)


@pytest.fixture()
def pair(repositories):
    return repositories.users.add("alice", "h"), repositories.users.add("bob", "h")


def test_toggle_follow_is_an_involution(graph, repositories, pair) -> None:
    alice, bob = pair

    assert graph.toggle_follow(bob.id, alice.id) is True
    assert repositories.users.get(alice.id).followers == [bob.id]
    assert repositories.users.get(bob.id).following == [alice.id]

    assert graph.toggle_follow(bob.id, alice.id) is False
    assert repositories.users.get(alice.id).followers == []
    assert repositories.users.get(bob.id).following == []


def test_self_follow_rejected_even_for_unknown_ids(graph) -> None:
    with pytest.raises(ValidationError):
        graph.toggle_follow(12345, 12345)


def test_follow_unknown_target(graph, pair) -> None:
    alice, _ = pair
    with pytest.raises(NotFound):
        graph.toggle_follow(alice.id, 999)


def test_follow_by_unknown_actor_writes_nothing(graph, repositories, pair) -> None:
    alice, _ = pair
    with pytest.raises(NotFound):
        graph.toggle_follow(999, alice.id)

    assert repositories.users.get(alice.id).followers == []


def test_is_following(graph, repositories, pair) -> None:
    alice, bob = pair
    graph.toggle_follow(bob.id, alice.id)
    author = repositories.users.get(alice.id)

    assert graph.is_following(bob.id, author) is True
    assert graph.is_following(alice.id, author) is False
    assert graph.is_following(None, author) is False
    assert graph.is_following(bob.id, None) is False


def test_profile_and_directory(graph, pair) -> None:
    alice, bob = pair
    graph.toggle_follow(bob.id, alice.id)

    profile = graph.profile(alice.id)
    assert [ref.username for ref in profile.followers] == ["bob"]
    assert profile.following == []

    directory = {u.username: u for u in graph.directory()}
    assert directory["bob"].following == [alice.id]

    with pytest.raises(NotFound):
        graph.profile(999)


class _FailingFollowingRepository(MemoryUserRepository):
    def set_following(self, user_id, followed_id, present):
        raise InternalError("Storage failure")


def test_failed_second_write_leaves_one_sided_follow() -> None:
    """The follower write is not rolled back when the following write fails."""
    users = _FailingFollowingRepository(MemoryStore())
    alice = users.add("alice", "h")
    bob = users.add("bob", "h")

    with pytest.raises(InternalError):
        SocialGraph(users).toggle_follow(bob.id, alice.id)

    assert users.get(alice.id).followers == [bob.id]
    assert users.get(bob.id).following == []
