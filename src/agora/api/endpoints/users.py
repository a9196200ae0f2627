# src/agora/api/endpoints/users.py
"""User directory and follow endpoints for the Agora API."""

from fastapi import APIRouter

from agora.api.dependencies import CurrentUserIdDep, SocialGraphDep
from agora.schemas import ErrorResponse, FollowResponse, UserProfile, UserSummary

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserSummary])
def list_users(graph: SocialGraphDep) -> list[UserSummary]:
    """List users with their follower and following ids."""
    return graph.directory()


@router.get(
    "/{user_id}",
    response_model=UserProfile,
    responses={404: {"model": ErrorResponse}},
)
def get_user(user_id: int, graph: SocialGraphDep) -> UserProfile:
    """Return one user with follower and following usernames."""
    return graph.profile(user_id)


@router.post(
    "/{user_id}/follow",
    response_model=FollowResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def toggle_follow(
    user_id: int,
    current_user_id: CurrentUserIdDep,
    graph: SocialGraphDep,
) -> FollowResponse:
    """Follow the user, or unfollow if the caller already follows them."""
    following = graph.toggle_follow(current_user_id, user_id)
    return FollowResponse(success=True, message="Followed" if following else "Unfollowed")
