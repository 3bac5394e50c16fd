"""Post data commands.

Example:
    feed-service posts seed --count 100
"""

from datetime import timedelta

import click

from feed_service.cli.utils import coro, info, success
from feed_service.core.database import utcnow
from feed_service.core.settings import get_db_settings
from feed_service.features.posts.models import Post
from feed_service.features.posts.repository import get_post_repository
from feed_service.infra.database import Database


@click.group(name="posts")
def posts() -> None:
    """Post data commands."""


@posts.command()
@click.option("--count", default=25, show_default=True, type=click.IntRange(1, 10_000))
@click.option("--author", default="seed-user", show_default=True, help="Author id for the posts")
@click.option(
    "--spacing",
    default=60,
    show_default=True,
    type=click.IntRange(0),
    help="Seconds between consecutive posts; 0 gives every post the same timestamp",
)
@coro
async def seed(count: int, author: str, spacing: int) -> None:
    """Insert sample posts, newest first at the current time."""
    database = Database(get_db_settings())
    await database.init(create_tables=True)
    try:
        now = utcnow()
        batch = [
            Post(
                content=f"Sample post #{index + 1}",
                author_id=author,
                author_username=author,
                author_display_name=author.replace("-", " ").title(),
                created_at=now - timedelta(seconds=spacing * (count - index)),
            )
            for index in range(count)
        ]
        info(f"Inserting {count} posts for {author!r}")
        async with database.session() as session:
            await get_post_repository().create_many(session, batch)
    finally:
        await database.teardown()

    success(f"Seeded {count} posts")
