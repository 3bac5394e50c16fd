"""Tests for the metrics middleware endpoint label."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from feed_service.app.middleware.metrics import route_template


def _route(path: str) -> SimpleNamespace:
    return SimpleNamespace(path=path, path_format=path)


@pytest.mark.parametrize(
    ("route_path", "request_path", "params", "expected"),
    [
        # Route paths that already carry the mount prefix
        ("/api/posts", "/api/posts", {}, "/api/posts"),
        ("/api/posts/{post_id}/like", "/api/posts/abc/like", {"post_id": "abc"}, "/api/posts/{post_id}/like"),
        # Route paths relative to the router they were declared on
        ("/posts", "/api/posts", {}, "/api/posts"),
        ("/posts/{post_id}", "/api/posts/0194a1f2", {"post_id": "0194a1f2"}, "/api/posts/{post_id}"),
        ("/health", "/health", {}, "/health"),
    ],
)
def test_route_template_includes_mount_prefix(
    route_path: str, request_path: str, params: dict, expected: str
) -> None:
    scope = {"route": _route(route_path), "path": request_path, "path_params": params}

    assert route_template(scope) == expected


def test_route_template_without_match() -> None:
    assert route_template({"path": "/nothing"}) == "unmatched"


def test_route_template_keeps_template_when_path_differs() -> None:
    scope = {"route": _route("/posts"), "path": "/elsewhere", "path_params": {}}

    assert route_template(scope) == "/posts"
