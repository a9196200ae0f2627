"""Post and comment Pydantic schemas."""

from datetime import datetime

from pydantic import Field

from .common import ApiModel


class PostCreate(ApiModel):
    """Schema for creating a new post."""

    title: str | None = Field(None, description="Required, non-empty")
    description: str | None = Field(None, description="Required, non-empty")
    image: str | None = Field(None, description="Optional image encoded as text (e.g. a base64 data URL)")


class PostUpdate(ApiModel):
    """Partial update; only fields present in the request body are applied."""

    title: str | None = None
    description: str | None = None
    image: str | None = None


class CommentCreate(ApiModel):
    """Schema for commenting on a post."""

    post_id: int | None = Field(None, description="Identifier of the post to comment on")
    body: str | None = Field(None, description="Comment text; must not be blank")


class CommentResponse(ApiModel):
    """Comment as returned right after it was added."""

    user_name: str
    body: str


class CommentView(ApiModel):
    """Comment inside a post view, with the author's name resolved."""

    user_id: int
    user_name: str
    body: str


class PostView(ApiModel):
    """Denormalized post as served to clients."""

    id: int
    author: str = Field(..., description="Author display name, or a placeholder if unknown")
    author_id: int | None
    title: str
    description: str
    image: str
    likes: list[int]
    likes_count: int
    comments: list[CommentView]
    created_at: datetime
    is_following_author: bool
