"""Pydantic schemas for the posts feature.

Wire format is camelCase; see CustomBase.
"""

from __future__ import annotations

from uuid import UUID

from pydantic import Field

from feed_service.core.schemas.base import CustomBase, UTCDateTime
from feed_service.features.posts.models import CONTENT_MAX_LENGTH, Post


class AuthorResponse(CustomBase):
    """Author snapshot stored with each post."""

    id: str
    username: str
    display_name: str
    avatar: str | None = None


class PostResponse(CustomBase):
    """Public shape of a post.

    Only the like count is exposed; liker identities never leave the service.
    """

    id: UUID
    content: str
    author: AuthorResponse
    like_count: int = Field(ge=0)
    created_at: UTCDateTime

    @classmethod
    def from_post(cls, post: Post) -> PostResponse:
        return cls(
            id=post.id,
            content=post.content,
            author=AuthorResponse(
                id=post.author_id,
                username=post.author_username,
                display_name=post.author_display_name,
                avatar=post.author_avatar,
            ),
            like_count=post.like_count,
            created_at=post.created_at,
        )


class PostCreate(CustomBase):
    """Payload used when creating a post."""

    content: str = Field(
        ...,
        min_length=1,
        max_length=CONTENT_MAX_LENGTH,
        description="Post body",
    )
    user_id: str = Field(..., min_length=1, max_length=64, description="Author id")
    username: str = Field(..., min_length=1, max_length=50)
    display_name: str = Field(..., min_length=1, max_length=100)
    avatar: str | None = Field(default=None, max_length=500, description="Avatar URL")


class UserActionRequest(CustomBase):
    """Body of like and delete requests. Stands in for an authenticated caller."""

    user_id: str = Field(..., min_length=1, max_length=64)


class LikeToggleResponse(CustomBase):
    """Result of a like toggle."""

    liked: bool
    likes_count: int = Field(ge=0)


class MessageResponse(CustomBase):
    """Plain confirmation message."""

    message: str
