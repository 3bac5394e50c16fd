"""SQLAlchemy models for the posts feature."""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Uuid,
    false,
)
from sqlalchemy.orm import Mapped, mapped_column

from feed_service.core.database import Base, TimestampMixin, UUIDv7PKMixin, utcnow

CONTENT_MAX_LENGTH = 280

# Who liked what. Never exposed through the API; only like_count is.
post_likes = Table(
    "post_likes",
    Base.metadata,
    Column(
        "post_id",
        Uuid,
        ForeignKey("posts.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("user_id", String(64), primary_key=True),
    Column("created_at", DateTime(timezone=True), nullable=False, default=utcnow),
)


class Post(Base, UUIDv7PKMixin, TimestampMixin):
    """A short text post with a denormalized snapshot of its author.

    ``is_deleted`` only ever moves from False to True. Deleted posts stay in
    the table but drop out of the feed and cannot be liked.
    """

    __tablename__ = "posts"
    __table_args__ = (
        CheckConstraint("like_count >= 0", name="like_count_non_negative"),
    )

    content: Mapped[str] = mapped_column(
        String(CONTENT_MAX_LENGTH),
        nullable=False,
        comment="Post body",
    )

    # Author snapshot taken at creation time
    author_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    author_username: Mapped[str] = mapped_column(String(50), nullable=False)
    author_display_name: Mapped[str] = mapped_column(String(100), nullable=False)
    author_avatar: Mapped[str | None] = mapped_column(String(500), nullable=True)

    like_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
    )
    is_deleted: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, author_id={self.author_id!r}, deleted={self.is_deleted})>"


# Serves the feed query: ORDER BY created_at DESC, id DESC over live posts
Index(
    "ix_posts_feed_order",
    Post.created_at.desc(),
    Post.id.desc(),
    postgresql_where=Post.is_deleted.is_(False),
    sqlite_where=Post.is_deleted.is_(False),
)


__all__ = [
    "CONTENT_MAX_LENGTH",
    "Post",
    "post_likes",
]
