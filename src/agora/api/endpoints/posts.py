# src/agora/api/endpoints/posts.py
"""Post-related endpoints for the Agora API."""

from fastapi import APIRouter, status

from agora.api.dependencies import (
    CurrentUserIdDep,
    FeedAssemblerDep,
    PostServiceDep,
    ViewerIdDep,
)
from agora.core.errors import Forbidden
from agora.core.settings import settings
from agora.schemas import ErrorResponse, PostCreate, PostUpdate, PostView

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=list[PostView])
def list_posts(
    posts: PostServiceDep,
    feed: FeedAssemblerDep,
    viewer_id: ViewerIdDep,
) -> list[PostView]:
    """List every post, newest first.

    A valid bearer token personalizes ``isFollowingAuthor``; a missing or
    invalid one is treated as an anonymous viewer.
    """
    return feed.assemble(posts.list(), viewer_id)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=PostView,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
def create_post(
    payload: PostCreate,
    current_user_id: CurrentUserIdDep,
    posts: PostServiceDep,
    feed: FeedAssemblerDep,
) -> PostView:
    """Create a post authored by the caller."""
    post = posts.create(current_user_id, payload.title, payload.description, payload.image)
    return feed.view(post, current_user_id)


@router.patch(
    "/{post_id}",
    response_model=PostView,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def update_post(
    post_id: int,
    payload: PostUpdate,
    current_user_id: CurrentUserIdDep,
    posts: PostServiceDep,
    feed: FeedAssemblerDep,
) -> PostView:
    """Edit the caller's own post; only fields present in the body change."""
    if not settings.allow_post_edits:
        raise Forbidden("Post editing is disabled")
    post = posts.update(post_id, current_user_id, payload.model_dump(exclude_unset=True))
    return feed.view(post, current_user_id)


@router.post(
    "/{post_id}/like",
    response_model=PostView,
    responses={404: {"model": ErrorResponse}},
)
def toggle_like(
    post_id: int,
    current_user_id: CurrentUserIdDep,
    posts: PostServiceDep,
    feed: FeedAssemblerDep,
) -> PostView:
    """Like the post, or remove the caller's like if already present."""
    post = posts.toggle_like(post_id, current_user_id)
    return feed.view(post, current_user_id)
