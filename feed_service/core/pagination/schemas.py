"""Pagination response schemas for the feed."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import Field

from feed_service.core.schemas.base import CustomBase

T = TypeVar("T")


class PaginationInfo(CustomBase):
    """Navigation metadata for one page.

    Attributes:
        next_cursor: Cursor of the last returned item, present only when more items exist
        has_more: Whether items exist beyond this page
        limit: Page size actually applied after clamping
        count: Number of items in this page
    """

    next_cursor: str | None = Field(
        default=None,
        description="Opaque cursor for the next page; null on the last page",
    )
    has_more: bool = Field(description="Whether more items exist")
    limit: int = Field(ge=1, description="Effective page size")
    count: int = Field(ge=0, description="Number of items returned")


class CursorPage(CustomBase, Generic[T]):
    """One page of feed items.

    Usage:
        @router.get("/posts", response_model=CursorPage[PostResponse])
        async def list_posts(...): ...

    Client navigation:
        GET /api/posts?limit=10
        GET /api/posts?limit=10&after=<pagination.nextCursor>
    """

    posts: list[T] = Field(default_factory=list, description="Items in feed order")
    pagination: PaginationInfo = Field(description="Pagination metadata")


__all__ = [
    "CursorPage",
    "PaginationInfo",
]
