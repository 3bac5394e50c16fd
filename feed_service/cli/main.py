"""Main CLI entry point for feed-service management commands."""

import click

from feed_service import __version__
from feed_service.cli.commands import database, posts, server
from feed_service.infra.logging import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="feed-service")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Feed Service CLI - run the API and manage its data.

    \b
    Commands:
      serve      Run the API server
      db         Create or drop tables
      posts      Seed sample posts

    \b
    Quick Start:
      feed-service db init
      feed-service posts seed --count 50
      feed-service serve
    """
    ctx.ensure_object(dict)


cli.add_command(server.serve)
cli.add_command(database.db)
cli.add_command(posts.posts)


def main() -> None:
    """Entry point for CLI."""
    setup_logging()
    cli(obj={})


if __name__ == "__main__":
    main()
