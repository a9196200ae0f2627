# src/agora/repositories/__init__.py
"""Repository interfaces and their memory and SQL backends."""

from dataclasses import dataclass

from sqlalchemy.orm import Session

from .base import CommentRecord, PostRecord, PostRepository, UserRecord, UserRepository
from .memory import MemoryPostRepository, MemoryStore, MemoryUserRepository, memory_store
from .sql import SqlPostRepository, SqlUserRepository


@dataclass(frozen=True)
class Repositories:
    """The pair of repositories a request works against."""

    users: UserRepository
    posts: PostRepository


def memory_repositories(store: MemoryStore | None = None) -> Repositories:
    """Build repositories over ``store`` (the process-wide store by default)."""
    store = store or memory_store
    return Repositories(users=MemoryUserRepository(store), posts=MemoryPostRepository(store))


def sql_repositories(session: Session) -> Repositories:
    """Build repositories sharing one SQLAlchemy session."""
    return Repositories(users=SqlUserRepository(session), posts=SqlPostRepository(session))


__all__ = [
    "CommentRecord",
    "MemoryStore",
    "PostRecord",
    "PostRepository",
    "Repositories",
    "UserRecord",
    "UserRepository",
    "memory_repositories",
    "memory_store",
    "sql_repositories",
]
