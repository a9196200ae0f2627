"""User and authentication Pydantic schemas."""

from pydantic import Field

from .common import ApiModel


class RegisterRequest(ApiModel):
    """Credentials submitted at registration.

    Presence is checked by the auth service so that missing fields produce the
    same ``{"error": ...}`` envelope as every other validation failure.
    """

    username: str | None = Field(None, description="Unique, case-sensitive username")
    password: str | None = Field(None, description="Plain password, hashed before storage")


class LoginRequest(ApiModel):
    """Credentials submitted at login."""

    username: str | None = None
    password: str | None = None


class LoginResponse(ApiModel):
    """Response returned after successful login."""

    token: str = Field(..., description="Signed bearer token")
    username: str
    user_id: int


class FollowResponse(ApiModel):
    """Outcome of a follow toggle."""

    success: bool
    message: str = Field(..., description="'Followed' or 'Unfollowed'")


class UserRef(ApiModel):
    id: int
    username: str


class UserSummary(ApiModel):
    """Directory entry with raw follower/following ids."""

    id: int
    username: str
    followers: list[int]
    following: list[int]


class UserProfile(ApiModel):
    """User detail with follower/following usernames resolved."""

    id: int
    username: str
    followers: list[UserRef]
    following: list[UserRef]
