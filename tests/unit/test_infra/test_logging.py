"""Tests for structured logging helpers."""

from __future__ import annotations

import json
import logging
import sys

import pytest

from feed_service.infra.logging import (
    ContextInjectingFilter,
    JSONFormatter,
    clear_log_context,
    get_log_context,
    remove_from_log_context,
    set_log_context,
)


@pytest.fixture(autouse=True)
def _clean_context():
    clear_log_context()
    yield
    clear_log_context()


def _record(msg: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord("feed.test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_context_set_and_remove() -> None:
    set_log_context(request_id="abc", path="/api/posts")
    remove_from_log_context("path")

    assert get_log_context() == {"request_id": "abc"}


def test_filter_copies_context_onto_record() -> None:
    set_log_context(request_id="abc")
    record = _record()

    assert ContextInjectingFilter().filter(record) is True
    assert record.request_id == "abc"


def test_json_formatter_output() -> None:
    formatter = JSONFormatter(static={"service": "feed-service"})

    line = formatter.format(_record("Post created", post_id="p1"))

    data = json.loads(line)
    assert data["level"] == "INFO"
    assert data["logger"] == "feed.test"
    assert data["message"] == "Post created"
    assert data["service"] == "feed-service"
    assert data["post_id"] == "p1"
    assert data["timestamp"].endswith("Z")
    assert "\n" not in line


def test_json_formatter_keeps_exceptions_on_one_line() -> None:
    formatter = JSONFormatter()
    try:
        raise ValueError("bad\nthing")
    except ValueError:
        record = logging.LogRecord(
            "feed.test", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
        )

    line = formatter.format(record)

    assert "\n" not in line
    assert "ValueError" in json.loads(line)["exception"]


def test_configure_logging_writes_json_file(tmp_path) -> None:
    from feed_service.infra.logging import configure_logging, shutdown

    log_file = tmp_path / "logs" / "feed.jsonl"
    root = logging.getLogger()
    previous_handlers, previous_level = root.handlers[:], root.level

    try:
        configure_logging(
            service_name="feed-test",
            log_level="INFO",
            file_path=log_file,
            console_enabled=False,
            capture_warnings=False,
        )
        set_log_context(request_id="req-1")
        logging.getLogger("feed_service.tests").info("written", extra={"post_id": "p1"})
        shutdown()
    finally:
        root.handlers[:] = previous_handlers
        root.setLevel(previous_level)

    (line,) = log_file.read_text(encoding="utf-8").splitlines()
    data = json.loads(line)
    assert data["message"] == "written"
    assert data["service"] == "feed-test"
    assert data["request_id"] == "req-1"
    assert data["post_id"] == "p1"


def test_lazy_logger_skips_callables_below_level() -> None:
    from feed_service.infra.logging import get_lazy_logger

    calls = []
    lazy_logger = get_lazy_logger("feed.test.lazy")
    lazy_logger.logger.setLevel(logging.INFO)

    lazy_logger.debug(lambda: calls.append("debug") or "debug")
    lazy_logger.info(lambda: calls.append("info") or "info")

    assert calls == ["info"]
