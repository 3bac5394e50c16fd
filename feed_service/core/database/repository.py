"""Minimal generic repository for SQLAlchemy models.

Provides basic CRUD operations with explicit session passing, plus the
sorted-query capability consumed by the page resolver.
For complex queries, use the session directly.

Example:
    class PostRepository(BaseRepository[Post]):
        async def get_active(self, session: AsyncSession, post_id: UUID) -> Post | None:
            stmt = select(Post).where(Post.id == post_id, Post.is_deleted.is_(False))
            return (await session.execute(stmt)).scalar_one_or_none()

    repo = PostRepository(Post)
    post = await repo.get(session, post_id)
    page_source = repo.sorted_query(session)  # satisfies SortedQuery
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import select

from feed_service.core.database.exceptions import NotFoundError
from feed_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from sqlalchemy import ColumnElement
    from sqlalchemy.ext.asyncio import AsyncSession


class BaseRepository[T]:
    """Minimal generic repository for CRUD operations.

    Provides:
        - get(session, id) -> T | None
        - get_or_raise(session, id) -> T (raises NotFoundError)
        - find_sorted(session, predicate, order_by=..., limit=...) -> Sequence[T]
        - sorted_query(session) -> SessionSortedQuery[T]
        - create(session, instance) -> T
        - create_many(session, instances) -> Sequence[T]

    Session is always explicit - no hidden state.
    """

    __slots__ = ("model", "_logger", "_lazy")

    def __init__(self, model: type[T]) -> None:
        """Initialize repository with model class.

        Args:
            model: SQLAlchemy model class (e.g., Post)
        """
        self.model = model
        # Standard logger for INFO/WARNING/ERROR
        self._logger = logging.getLogger(f"repository.{model.__name__}")
        # Lazy logger for DEBUG (zero overhead when DEBUG disabled)
        self._lazy = get_lazy_logger(f"repository.{model.__name__}")

    async def get(
        self,
        session: AsyncSession,
        id: Any,  # noqa: A002
    ) -> T | None:
        """Get entity by primary key.

        Args:
            session: Database session
            id: Primary key value

        Returns:
            Entity if found, None otherwise
        """
        instance = await session.get(self.model, id)

        self._lazy.debug(
            lambda: f"db.get: {self.model.__name__}({id}) -> {'found' if instance else 'not found'}"
        )
        return instance

    async def get_or_raise(
        self,
        session: AsyncSession,
        id: Any,  # noqa: A002
    ) -> T:
        """Get entity by primary key or raise NotFoundError.

        Raises:
            NotFoundError: If entity doesn't exist
        """
        instance = await self.get(session, id)
        if instance is None:
            self._logger.info(
                "Entity not found",
                extra={
                    "entity": self.model.__name__,
                    "id": str(id),
                    "operation": "db.get_or_raise",
                },
            )
            raise NotFoundError(self.model.__name__, {"id": id})
        return instance

    async def find_sorted(
        self,
        session: AsyncSession,
        predicate: ColumnElement[bool],
        *,
        order_by: Sequence[ColumnElement[Any]],
        limit: int,
    ) -> Sequence[T]:
        """Run one ordered, bounded query.

        Args:
            session: Database session
            predicate: Complete WHERE clause
            order_by: ORDER BY expressions, applied in sequence
            limit: Maximum number of rows returned

        Returns:
            Rows in the requested order
        """
        stmt = select(self.model).where(predicate).order_by(*order_by).limit(limit)
        result = await session.execute(stmt)
        items = result.scalars().all()

        self._lazy.debug(
            lambda: f"db.find_sorted: {self.model.__name__}(limit={limit}) -> {len(items)} items"
        )
        return items

    def sorted_query(self, session: AsyncSession) -> SessionSortedQuery[T]:
        """Bind this repository to a session as a sorted-query source."""
        return SessionSortedQuery(self, session)

    async def create(self, session: AsyncSession, instance: T) -> T:
        """Persist a new entity.

        Adds to session, flushes to get generated values (like id),
        and refreshes to ensure instance is up-to-date.
        """
        session.add(instance)
        await session.flush()
        await session.refresh(instance)

        entity_id = getattr(instance, "id", None)
        self._lazy.debug(lambda: f"db.create: {self.model.__name__}(id={entity_id})")
        return instance

    async def create_many(self, session: AsyncSession, instances: Iterable[T]) -> Sequence[T]:
        """Persist several new entities in one flush."""
        items = list(instances)
        session.add_all(items)
        await session.flush()

        self._lazy.debug(lambda: f"db.create_many: {self.model.__name__} x{len(items)}")
        return items


class SessionSortedQuery[T]:
    """A repository bound to one session, exposing ``query(...)``.

    Instances live for a single request; the session's lifecycle is owned
    by the caller.
    """

    __slots__ = ("_repository", "_session")

    def __init__(self, repository: BaseRepository[T], session: AsyncSession) -> None:
        self._repository = repository
        self._session = session

    async def query(
        self,
        predicate: ColumnElement[bool],
        *,
        order_by: Sequence[ColumnElement[Any]],
        limit: int,
    ) -> Sequence[T]:
        return await self._repository.find_sorted(
            self._session, predicate, order_by=order_by, limit=limit
        )


__all__ = [
    "BaseRepository",
    "SessionSortedQuery",
]
