"""Shared API dependencies for storage, services and authentication."""

from collections.abc import Generator
from typing import Annotated

from fastapi import Depends, Header

from agora.core.settings import settings
from agora.db.session import SessionLocal
from agora.repositories import Repositories, memory_repositories, sql_repositories
from agora.services import AuthService, FeedAssembler, PostService, SocialGraph


def get_repositories() -> Generator[Repositories, None, None]:
    """Yield the repositories for the configured storage backend.

    The memory backend shares one process-wide store; the SQL backend opens
    a session per request.
    """
    if settings.uses_memory_store:
        yield memory_repositories()
        return

    db = SessionLocal()
    try:
        yield sql_repositories(db)
    finally:
        db.close()


RepositoriesDep = Annotated[Repositories, Depends(get_repositories)]


def get_auth_service(repos: RepositoriesDep) -> AuthService:
    return AuthService(repos.users)


def get_social_graph(repos: RepositoriesDep) -> SocialGraph:
    return SocialGraph(repos.users)


def get_feed_assembler(
    repos: RepositoriesDep,
    graph: Annotated[SocialGraph, Depends(get_social_graph)],
) -> FeedAssembler:
    return FeedAssembler(repos.users, graph)


def get_post_service(
    repos: RepositoriesDep,
    feed: Annotated[FeedAssembler, Depends(get_feed_assembler)],
) -> PostService:
    return PostService(repos.posts, repos.users, feed)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
SocialGraphDep = Annotated[SocialGraph, Depends(get_social_graph)]
FeedAssemblerDep = Annotated[FeedAssembler, Depends(get_feed_assembler)]
PostServiceDep = Annotated[PostService, Depends(get_post_service)]


def get_current_user_id(
    auth: AuthServiceDep,
    authorization: Annotated[str | None, Header()] = None,
) -> int:
    """Return the id of the authenticated caller.

    Raises:
        Unauthenticated: If the bearer token is missing, malformed, expired
            or badly signed.
    """
    return auth.authenticate_header(authorization)


def get_optional_viewer_id(
    auth: AuthServiceDep,
    authorization: Annotated[str | None, Header()] = None,
) -> int | None:
    """Return the caller's id when a valid token is sent, otherwise None."""
    return auth.optional_viewer(authorization)


# Type aliases for caller identity dependencies
CurrentUserIdDep = Annotated[int, Depends(get_current_user_id)]
ViewerIdDep = Annotated[int | None, Depends(get_optional_viewer_id)]
