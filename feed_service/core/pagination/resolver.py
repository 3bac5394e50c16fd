"""Keyset page resolution for reverse-chronological feeds.

Pages are ordered by ``(timestamp DESC, identity DESC)``. Given the position
of the last item a client has seen, the next page is exactly the rows that
satisfy::

    timestamp < c OR (timestamp = c AND identity < i)

The resolver asks its sorted-query source for ``limit + 1`` rows, keeps the
first ``limit`` and derives the next cursor from the last *retained* row.
Each resolution issues one query and keeps no state between calls; rows
inserted or soft-deleted between requests simply match or stop matching the
predicate on the next call.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from sqlalchemy import and_, or_, true

from feed_service.core.exceptions import InvalidCursorException, PageQueryException
from feed_service.core.pagination.cursor import (
    CursorCodec,
    InvalidCursor,
    PagePosition,
    ValidCursor,
)
from feed_service.core.pagination.schemas import CursorPage, PaginationInfo
from feed_service.core.settings import PaginationSettings, get_pagination_settings
from feed_service.infra.logging import get_lazy_logger
from feed_service.infra.metrics import (
    feed_invalid_cursor_total,
    feed_page_query_duration_seconds,
    feed_pages_served_total,
)

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)


class SortedQuery[M](Protocol):
    """Source of ordered rows, typically a repository bound to a session."""

    async def query(
        self,
        predicate: ColumnElement[bool],
        *,
        order_by: Sequence[ColumnElement[Any]],
        limit: int,
    ) -> Sequence[M]: ...


@dataclass(frozen=True, slots=True)
class KeysetOrdering:
    """Compound descending sort key made of a timestamp and a unique identity.

    Both columns must also be the components of the cursor; the identity
    breaks ties between rows sharing a timestamp.
    """

    timestamp: Any
    identity: Any

    def order_by(self) -> tuple[ColumnElement[Any], ...]:
        return (self.timestamp.desc(), self.identity.desc())

    def after(self, position: PagePosition) -> ColumnElement[bool]:
        """Rows strictly after ``position`` in this ordering."""
        return or_(
            self.timestamp < position.created_at,
            and_(self.timestamp == position.created_at, self.identity < position.id),
        )


def clamp_limit(raw: int | str | None, *, default: int, maximum: int) -> int:
    """Coerce a caller-supplied page size into ``[1, maximum]``.

    Missing or non-numeric values yield ``default``; numbers outside the
    range are clamped rather than rejected.

    Example:
        >>> clamp_limit("abc", default=10, maximum=50)
        10
        >>> clamp_limit(0, default=10, maximum=50)
        1
        >>> clamp_limit("10000", default=10, maximum=50)
        50
    """
    if raw is None or isinstance(raw, bool):
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return max(1, min(value, maximum))


def split_overfetch[M](rows: Sequence[M], limit: int) -> tuple[list[M], bool]:
    """Split a ``limit + 1`` over-fetch into the page and a has-more flag."""
    has_more = len(rows) > limit
    return list(rows[:limit]), has_more


class PageResolver[M, R]:
    """Resolve ``(cursor, limit)`` into one page of projected items.

    Args:
        query: Sorted-query source for rows of type M.
        ordering: Keyset ordering, shared by the ORDER BY and the seek predicate.
        project: Maps a row to its public shape R. Only what this returns
            reaches clients.
        base_predicate: Filter applied to every page (e.g. excluding
            soft-deleted rows).
        settings: Page size defaults; loaded from the environment when omitted.

    Example:
        resolver = PageResolver(
            repo.sorted_query(session),
            KeysetOrdering(Post.created_at, Post.id),
            project=PostResponse.from_post,
            base_predicate=Post.is_deleted.is_(False),
        )
        page = await resolver.resolve(after, limit)
    """

    __slots__ = ("_query", "_ordering", "_project", "_base_predicate", "_settings")

    def __init__(
        self,
        query: SortedQuery[M],
        ordering: KeysetOrdering,
        *,
        project: Callable[[M], R],
        base_predicate: ColumnElement[bool] | None = None,
        settings: PaginationSettings | None = None,
    ) -> None:
        self._query = query
        self._ordering = ordering
        self._project = project
        self._base_predicate = base_predicate
        self._settings = settings or get_pagination_settings()

    def effective_limit(self, raw: int | str | None) -> int:
        return clamp_limit(
            raw,
            default=self._settings.default_limit,
            maximum=self._settings.max_limit,
        )

    def build_predicate(self, position: PagePosition | None) -> ColumnElement[bool]:
        """Combine the base filter with the seek condition for ``position``."""
        clauses = []
        if self._base_predicate is not None:
            clauses.append(self._base_predicate)
        if position is not None:
            clauses.append(self._ordering.after(position))
        if not clauses:
            return true()
        return and_(*clauses)

    async def resolve(
        self,
        cursor: str | None,
        limit: int | str | None = None,
    ) -> CursorPage[R]:
        """Resolve one page.

        An absent or empty cursor starts from the newest item.

        Raises:
            InvalidCursorException: The cursor failed to decode; no query is issued.
            PageQueryException: The sorted query failed.
        """
        effective = self.effective_limit(limit)
        position = self._decode(cursor) if cursor else None
        predicate = self.build_predicate(position)

        started = time.perf_counter()
        try:
            rows = await self._query.query(
                predicate,
                order_by=self._ordering.order_by(),
                limit=effective + 1,
            )
        except Exception as exc:
            logger.exception(
                "Page query failed",
                extra={"limit": effective, "has_cursor": position is not None},
            )
            raise PageQueryException() from exc
        finally:
            feed_page_query_duration_seconds.observe(time.perf_counter() - started)

        retained, has_more = split_overfetch(rows, effective)
        next_cursor = (
            CursorCodec.encode(CursorCodec.position_of(retained[-1])) if has_more else None
        )

        feed_pages_served_total.labels(has_more=str(has_more).lower()).inc()
        lazy_logger.debug(
            lambda: f"page resolved: limit={effective} count={len(retained)} has_more={has_more}"
        )

        return CursorPage(
            posts=[self._project(row) for row in retained],
            pagination=PaginationInfo(
                next_cursor=next_cursor,
                has_more=has_more,
                limit=effective,
                count=len(retained),
            ),
        )

    def _decode(self, cursor: str) -> PagePosition:
        match CursorCodec.decode(cursor):
            case ValidCursor(position=position):
                return position
            case InvalidCursor(reason=reason):
                feed_invalid_cursor_total.inc()
                logger.info("Rejected pagination cursor", extra={"reason": reason})
                raise InvalidCursorException()


__all__ = [
    "KeysetOrdering",
    "PageResolver",
    "SortedQuery",
    "clamp_limit",
    "split_overfetch",
]
