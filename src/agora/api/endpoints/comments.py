# src/agora/api/endpoints/comments.py
"""Comment endpoints for the Agora API."""

from fastapi import APIRouter, status

from agora.api.dependencies import CurrentUserIdDep, PostServiceDep
from agora.schemas import CommentCreate, CommentResponse, CommentView, ErrorResponse

router = APIRouter(prefix="/comments", tags=["comments"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CommentResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def add_comment(
    payload: CommentCreate,
    current_user_id: CurrentUserIdDep,
    posts: PostServiceDep,
) -> CommentResponse:
    """Append a comment to a post."""
    return posts.add_comment(payload.post_id, current_user_id, payload.body)


@router.get(
    "/post/{post_id}",
    response_model=list[CommentView],
    responses={404: {"model": ErrorResponse}},
)
def list_post_comments(post_id: int, posts: PostServiceDep) -> list[CommentView]:
    """Return a post's comments in the order they were written."""
    return posts.comments(post_id)
