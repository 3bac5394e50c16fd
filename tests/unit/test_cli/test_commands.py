"""Tests for the management CLI.

Commands run against the in-memory SQLite database configured in conftest.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from feed_service import __version__
from feed_service.cli.main import cli


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


def test_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_help_lists_command_groups(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    for name in ("serve", "db", "posts"):
        assert name in result.output


def test_db_init(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["db", "init"])

    assert result.exit_code == 0, result.output
    assert "Database ready" in result.output


def test_db_drop_asks_for_confirmation(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["db", "drop"], input="n\n")

    assert result.exit_code != 0
    assert "All tables dropped" not in result.output


def test_db_drop_with_yes(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["db", "drop", "--yes"])

    assert result.exit_code == 0, result.output
    assert "All tables dropped" in result.output


def test_seed_posts(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["posts", "seed", "--count", "5", "--author", "demo-user"])

    assert result.exit_code == 0, result.output
    assert "Seeded 5 posts" in result.output


def test_seed_rejects_zero(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["posts", "seed", "--count", "0"])

    assert result.exit_code == 2


def test_serve_runs_factory(cli_runner: CliRunner) -> None:
    with patch("feed_service.cli.commands.server.uvicorn.run") as run:
        result = cli_runner.invoke(cli, ["serve", "--port", "8123"])

    assert result.exit_code == 0, result.output
    args, kwargs = run.call_args
    assert args == ("feed_service.app.main:create_app",)
    assert kwargs["factory"] is True
    assert kwargs["port"] == 8123
