"""Repository for the posts feature."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import case, delete, select, update
from sqlalchemy.dialects import postgresql, sqlite

from feed_service.core.database.repository import BaseRepository
from feed_service.features.posts.models import Post, post_likes

if TYPE_CHECKING:
    from uuid import UUID

    from sqlalchemy import ColumnElement
    from sqlalchemy.ext.asyncio import AsyncSession


class PostRepository(BaseRepository[Post]):
    """Repository for Post model.

    Inherits from BaseRepository:
        - get(session, id) -> Post | None
        - get_or_raise(session, id) -> Post
        - find_sorted(session, predicate, order_by, limit) -> Sequence[Post]
        - sorted_query(session) -> SessionSortedQuery[Post]
        - create(session, instance) -> Post
        - create_many(session, instances) -> Sequence[Post]

    Feature-specific methods below.
    """

    def __init__(self) -> None:
        super().__init__(Post)

    async def get_active(self, session: AsyncSession, post_id: UUID) -> Post | None:
        """Get a post unless it is missing or soft-deleted."""
        stmt = select(Post).where(Post.id == post_id, Post.is_deleted.is_(False))
        post = (await session.execute(stmt)).scalar_one_or_none()

        self._lazy.debug(lambda: f"db.get_active({post_id}) -> {post is not None}")
        return post

    async def has_liked(self, session: AsyncSession, post_id: UUID, user_id: str) -> bool:
        stmt = select(post_likes.c.post_id).where(
            post_likes.c.post_id == post_id,
            post_likes.c.user_id == user_id,
        )
        liked = (await session.execute(stmt)).first() is not None

        self._lazy.debug(lambda: f"db.has_liked({post_id}, {user_id!r}) -> {liked}")
        return liked

    async def add_like(self, session: AsyncSession, post_id: UUID, user_id: str) -> int:
        """Record a like and return the new like count.

        A like that already exists is left alone and the count is returned
        unchanged, so two concurrent likes by one user count once.
        """
        dialect = session.get_bind().dialect.name
        insert = postgresql.insert if dialect == "postgresql" else sqlite.insert
        stmt = (
            insert(post_likes)
            .values(post_id=post_id, user_id=user_id)
            .on_conflict_do_nothing(index_elements=[post_likes.c.post_id, post_likes.c.user_id])
        )
        result = await session.execute(stmt)

        if result.rowcount == 0:
            count = await self._like_count(session, post_id)
        else:
            count = await self._adjust_like_count(session, post_id, Post.like_count + 1)

        self._lazy.debug(lambda: f"db.add_like({post_id}, {user_id!r}) -> count={count}")
        return count

    async def remove_like(self, session: AsyncSession, post_id: UUID, user_id: str) -> int:
        """Remove a like and return the new like count (never below zero)."""
        result = await session.execute(
            delete(post_likes).where(
                post_likes.c.post_id == post_id,
                post_likes.c.user_id == user_id,
            )
        )
        if result.rowcount == 0:
            count = await self._like_count(session, post_id)
        else:
            count = await self._adjust_like_count(
                session,
                post_id,
                case((Post.like_count > 0, Post.like_count - 1), else_=0),
            )

        self._lazy.debug(lambda: f"db.remove_like({post_id}, {user_id!r}) -> count={count}")
        return count

    async def soft_delete(self, session: AsyncSession, post: Post) -> Post:
        """Flag a post as deleted. The flag is never cleared."""
        post.is_deleted = True
        await session.flush()

        self._logger.info(
            "Post soft-deleted",
            extra={"post_id": str(post.id), "operation": "db.soft_delete"},
        )
        return post

    async def _like_count(self, session: AsyncSession, post_id: UUID) -> int:
        stmt = select(Post.like_count).where(Post.id == post_id)
        return (await session.execute(stmt)).scalar_one()

    async def _adjust_like_count(
        self,
        session: AsyncSession,
        post_id: UUID,
        expression: ColumnElement[int],
    ) -> int:
        # Computed in SQL so concurrent toggles do not lose updates
        stmt = (
            update(Post)
            .where(Post.id == post_id)
            .values(like_count=expression)
            .returning(Post.like_count)
            .execution_options(synchronize_session="fetch")
        )
        return (await session.execute(stmt)).scalar_one()


# Factory function for dependency injection
_post_repository: PostRepository | None = None


def get_post_repository() -> PostRepository:
    """Get the shared PostRepository instance."""
    global _post_repository
    if _post_repository is None:
        _post_repository = PostRepository()
    return _post_repository
