"""Service layer for the posts feature."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from feed_service.core.database import parse_uuid
from feed_service.core.exceptions import ForbiddenException, NotFoundException
from feed_service.core.pagination import CursorPage, KeysetOrdering, PageResolver
from feed_service.features.posts.models import Post
from feed_service.features.posts.repository import PostRepository, get_post_repository
from feed_service.features.posts.schemas import LikeToggleResponse, PostResponse
from feed_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession

    from feed_service.core.settings import PaginationSettings
    from feed_service.features.posts.schemas import PostCreate


# Standard logger for INFO/WARNING/ERROR
logger = logging.getLogger(__name__)
# Lazy logger for DEBUG (zero overhead when DEBUG disabled)
lazy_logger = get_lazy_logger(__name__)

FEED_ORDERING = KeysetOrdering(timestamp=Post.created_at, identity=Post.id)


class PostService:
    """Service for post operations.

    Handles business logic for:
    - Creating posts
    - Toggling likes
    - Soft-deleting posts owned by the caller
    - Listing the feed page by page
    """

    def __init__(
        self,
        session: AsyncSession,
        repo: PostRepository | None = None,
        *,
        pagination: PaginationSettings | None = None,
    ) -> None:
        """Initialize the post service.

        Args:
            session: Database session for operations
            repo: Post repository (optional, uses default if not provided)
            pagination: Page size settings (optional, loaded from env if not provided)
        """
        self._session = session
        self._repo = repo or get_post_repository()
        self._pagination = pagination

    async def list_posts(
        self,
        after: str | None,
        limit: int | str | None = None,
    ) -> CursorPage[PostResponse]:
        """Return one feed page of live posts, newest first."""
        resolver = PageResolver(
            self._repo.sorted_query(self._session),
            FEED_ORDERING,
            project=PostResponse.from_post,
            base_predicate=Post.is_deleted.is_(False),
            settings=self._pagination,
        )
        return await resolver.resolve(after, limit)

    async def create_post(self, payload: PostCreate) -> Post:
        """Create a new post with a snapshot of its author."""
        post = await self._repo.create(
            self._session,
            Post(
                content=payload.content,
                author_id=payload.user_id,
                author_username=payload.username,
                author_display_name=payload.display_name,
                author_avatar=payload.avatar,
            ),
        )

        logger.info(
            "Post created",
            extra={"post_id": str(post.id), "author_id": post.author_id},
        )
        return post

    async def toggle_like(self, post_id: str | UUID, user_id: str) -> LikeToggleResponse:
        """Like the post, or remove the like if the user already liked it.

        Raises:
            NotFoundException: If the post is missing or soft-deleted
        """
        post = await self._get_active_post(post_id)

        if await self._repo.has_liked(self._session, post.id, user_id):
            count = await self._repo.remove_like(self._session, post.id, user_id)
            liked = False
        else:
            count = await self._repo.add_like(self._session, post.id, user_id)
            liked = True

        lazy_logger.debug(
            lambda: f"service.toggle_like({post.id}, {user_id!r}) -> liked={liked}, count={count}"
        )
        return LikeToggleResponse(liked=liked, likes_count=count)

    async def delete_post(self, post_id: str | UUID, user_id: str) -> None:
        """Soft-delete a post owned by ``user_id``.

        Raises:
            NotFoundException: If the post is missing or already deleted
            ForbiddenException: If ``user_id`` is not the author
        """
        post = await self._get_active_post(post_id)

        if post.author_id != user_id:
            logger.warning(
                "Delete refused for non-author",
                extra={"post_id": str(post.id), "user_id": user_id},
            )
            raise ForbiddenException(
                detail="Not authorized to delete this post",
                type="post-not-owned",
                extra={"post_id": str(post.id)},
            )

        await self._repo.soft_delete(self._session, post)

    async def _get_active_post(self, post_id: str | UUID) -> Post:
        try:
            uid = parse_uuid(post_id)
        except ValueError:
            # An id that cannot exist is reported like any other missing post
            uid = None

        post = await self._repo.get_active(self._session, uid) if uid is not None else None
        if post is None:
            raise NotFoundException(
                detail="Post not found",
                type="post-not-found",
                extra={"post_id": str(post_id)},
            )
        return post
