# tests/test_repositories.py
"""Backend-specific repository behaviour."""

import pytest
from sqlalchemy import create_engine, inspect

from agora.core.errors import Conflict, NotFound
from agora.db.time import utcnow
from agora.repositories import MemoryStore, sql_repositories
from agora.repositories.memory import MemoryPostRepository, MemoryUserRepository
from agora.scripts.migrate import run_upgrade_head


def test_memory_records_are_detached_copies() -> None:
    store = MemoryStore()
    users = MemoryUserRepository(store)
    alice = users.add("alice", "h")

    alice.followers.append(42)

    assert users.get(alice.id).followers == []


def test_memory_posts_are_prepended() -> None:
    posts = MemoryPostRepository(MemoryStore())
    for title in ("a", "b", "c"):
        posts.add(author_id=1, title=title, description="D", image="", created_at=utcnow())

    assert [p.title for p in posts.list()] == ["c", "b", "a"]


def test_memory_store_reset_restarts_ids() -> None:
    store = MemoryStore()
    users = MemoryUserRepository(store)
    users.add("alice", "h")
    store.reset()
    assert users.add("bob", "h").id == 1


def test_set_like_on_missing_post(repositories) -> None:
    with pytest.raises(NotFound):
        repositories.posts.set_like(404, 1, True)


def test_set_like_does_not_duplicate(repositories) -> None:
    post = repositories.posts.add(
        author_id=1, title="T", description="D", image="", created_at=utcnow()
    )
    repositories.posts.set_like(post.id, 7, True)
    assert repositories.posts.set_like(post.id, 7, True).likes == [7]


def test_sql_duplicate_username_is_conflict(db_session) -> None:
    users = sql_repositories(db_session).users
    users.add("alice", "h")
    with pytest.raises(Conflict):
        users.add("alice", "h2")
    # Session stays usable after the rollback.
    assert users.get_by_username("alice") is not None


def test_migrations_create_schema(tmp_path) -> None:
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    run_upgrade_head(url)

    tables = set(inspect(create_engine(url)).get_table_names())
    assert {
        "user_account",
        "user_follower",
        "user_following",
        "post",
        "post_like",
        "post_comment",
    } <= tables


def test_memory_list_shares_image_payloads() -> None:
    posts = MemoryPostRepository(MemoryStore())
    image = "data:image/png;base64," + "A" * 4096
    posts.add(author_id=1, title="T", description="D", image=image, created_at=utcnow())

    listed = posts.list()[0]
    assert listed.image is image
    listed.likes.append(7)
    assert posts.list()[0].likes == []


def test_migrations_honour_alembic_url(tmp_path, monkeypatch) -> None:
    configured = f"sqlite:///{tmp_path / 'configured.db'}"
    override = f"sqlite:///{tmp_path / 'override.db'}"
    monkeypatch.setenv("ALEMBIC_URL", override)

    run_upgrade_head(configured)

    assert "post" in inspect(create_engine(override)).get_table_names()
    assert "post" not in inspect(create_engine(configured)).get_table_names()
