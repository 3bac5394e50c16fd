"""Keyset (cursor) pagination for the feed.

Components:
    - CursorCodec: opaque token <-> PagePosition(created_at, id)
    - PageResolver: seek predicate, limit+1 over-fetch, next-cursor derivation
    - CursorPage / PaginationInfo: response envelope

Usage:
    resolver = PageResolver(
        repo.sorted_query(session),
        KeysetOrdering(Post.created_at, Post.id),
        project=PostResponse.from_post,
        base_predicate=Post.is_deleted.is_(False),
    )
    page = await resolver.resolve(after="eyJjIjoi...", limit="10")
"""

from feed_service.core.pagination.cursor import (
    CursorCodec,
    DecodedCursor,
    InvalidCursor,
    PagePosition,
    ValidCursor,
)
from feed_service.core.pagination.resolver import (
    KeysetOrdering,
    PageResolver,
    SortedQuery,
    clamp_limit,
    split_overfetch,
)
from feed_service.core.pagination.schemas import CursorPage, PaginationInfo

__all__ = [
    "CursorCodec",
    "CursorPage",
    "DecodedCursor",
    "InvalidCursor",
    "KeysetOrdering",
    "PagePosition",
    "PageResolver",
    "PaginationInfo",
    "SortedQuery",
    "ValidCursor",
    "clamp_limit",
    "split_overfetch",
]
