"""Integration tests for the posts API."""

from __future__ import annotations

import base64
from datetime import timedelta
from typing import TYPE_CHECKING
from uuid import uuid4

import pytest

if TYPE_CHECKING:
    from httpx import AsyncClient

    from tests.conftest import PostFactory

pytestmark = pytest.mark.integration

POSTS_URL = "/api/posts"


async def _walk_feed(client: AsyncClient, limit: int) -> list[dict]:
    """Follow nextCursor until the feed is exhausted, returning every page."""
    pages = []
    params: dict[str, str | int] = {"limit": limit}
    while True:
        response = await client.get(POSTS_URL, params=params)
        assert response.status_code == 200
        page = response.json()
        pages.append(page)
        if not page["pagination"]["hasMore"]:
            return pages
        params = {"limit": limit, "after": page["pagination"]["nextCursor"]}


# ──────────────────────────────────────────────────────────────
# Feed listing
# ──────────────────────────────────────────────────────────────


async def test_walks_whole_feed_without_gaps_or_duplicates(
    client: AsyncClient, create_posts: PostFactory
) -> None:
    posts = await create_posts(25)

    pages = await _walk_feed(client, limit=10)

    assert [len(page["posts"]) for page in pages] == [10, 10, 5]
    assert [page["pagination"]["hasMore"] for page in pages] == [True, True, False]
    assert pages[-1]["pagination"]["nextCursor"] is None

    seen = [post["id"] for page in pages for post in page["posts"]]
    expected = [str(post.id) for post in reversed(posts)]
    assert seen == expected


async def test_posts_sharing_a_timestamp_are_split_by_id(
    client: AsyncClient, create_posts: PostFactory
) -> None:
    posts = await create_posts(3, step=timedelta(0))

    pages = await _walk_feed(client, limit=1)

    seen = [page["posts"][0]["id"] for page in pages]
    assert len(pages) == 3
    assert seen == sorted((str(post.id) for post in posts), reverse=True)


async def test_first_page_reports_pagination(
    client: AsyncClient, create_posts: PostFactory
) -> None:
    await create_posts(3)

    response = await client.get(POSTS_URL)

    assert response.status_code == 200
    assert response.json()["pagination"] == {
        "nextCursor": None,
        "hasMore": False,
        "limit": 10,
        "count": 3,
    }


async def test_empty_feed(client: AsyncClient) -> None:
    response = await client.get(POSTS_URL)

    assert response.status_code == 200
    body = response.json()
    assert body["posts"] == []
    assert body["pagination"]["hasMore"] is False
    assert body["pagination"]["count"] == 0


@pytest.mark.parametrize(
    ("total", "has_more"),
    [
        (5, False),
        (6, True),
    ],
)
async def test_has_more_only_when_rows_remain(
    client: AsyncClient, create_posts: PostFactory, total: int, has_more: bool
) -> None:
    await create_posts(total)

    response = await client.get(POSTS_URL, params={"limit": 5})

    pagination = response.json()["pagination"]
    assert pagination["count"] == 5
    assert pagination["hasMore"] is has_more
    assert (pagination["nextCursor"] is not None) is has_more


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("abc", 10),
        ("0", 1),
        ("-3", 1),
        ("10000", 50),
        ("7", 7),
    ],
)
async def test_limit_is_clamped(
    client: AsyncClient, create_posts: PostFactory, raw: str, expected: int
) -> None:
    await create_posts(60, step=timedelta(milliseconds=10))

    response = await client.get(POSTS_URL, params={"limit": raw})

    assert response.status_code == 200
    pagination = response.json()["pagination"]
    assert pagination["limit"] == expected
    assert pagination["count"] == expected


async def test_empty_after_starts_from_newest(
    client: AsyncClient, create_posts: PostFactory
) -> None:
    posts = await create_posts(2)

    response = await client.get(POSTS_URL, params={"after": ""})

    assert response.status_code == 200
    assert response.json()["posts"][0]["id"] == str(posts[-1].id)


async def test_soft_deleted_posts_leave_the_feed(
    client: AsyncClient, create_posts: PostFactory
) -> None:
    posts = await create_posts(5)
    for post in (posts[1], posts[3]):
        response = await client.request(
            "DELETE", f"{POSTS_URL}/{post.id}", json={"userId": "alice"}
        )
        assert response.status_code == 200

    response = await client.get(POSTS_URL)

    body = response.json()
    ids = [item["id"] for item in body["posts"]]
    assert body["pagination"]["count"] == 3
    assert ids == [str(posts[4].id), str(posts[2].id), str(posts[0].id)]


async def test_cursor_survives_newer_inserts(
    client: AsyncClient, create_posts: PostFactory
) -> None:
    older = await create_posts(4)
    first = (await client.get(POSTS_URL, params={"limit": 2})).json()

    # Newer posts must not shift the second page
    await create_posts(3, start=older[-1].created_at + timedelta(minutes=1))
    second = (
        await client.get(
            POSTS_URL, params={"limit": 2, "after": first["pagination"]["nextCursor"]}
        )
    ).json()

    assert [item["id"] for item in second["posts"]] == [str(older[1].id), str(older[0].id)]
    assert second["pagination"]["hasMore"] is False


async def test_feed_exposes_only_public_fields(
    client: AsyncClient, create_posts: PostFactory
) -> None:
    (post,) = await create_posts(1)
    await client.post(f"{POSTS_URL}/{post.id}/like", json={"userId": "bob"})

    response = await client.get(POSTS_URL)

    item = response.json()["posts"][0]
    assert set(item) == {"id", "content", "author", "likeCount", "createdAt"}
    assert set(item["author"]) == {"id", "username", "displayName", "avatar"}
    assert item["likeCount"] == 1
    assert item["author"] == {
        "id": "alice",
        "username": "alice",
        "displayName": "Alice",
        "avatar": "https://avatars.test/alice.png",
    }
    assert "bob" not in response.text


@pytest.mark.parametrize(
    "cursor",
    [
        "not a cursor",
        "!!!!",
        base64.urlsafe_b64encode(b"plain text").decode().rstrip("="),
        base64.urlsafe_b64encode(b'{"c": "yesterday", "i": "x"}').decode().rstrip("="),
        "A" * 300,
        base64.urlsafe_b64encode(
            b'{"c": "9999-12-31T23:59:59-05:00", "i": "0194a1f2-3c4d-7e5f-8a9b-0c1d2e3f4a5b"}'
        ).decode().rstrip("="),
        base64.urlsafe_b64encode(
            b'{"c": "0001-01-01T00:00:00+05:00", "i": "0194a1f2-3c4d-7e5f-8a9b-0c1d2e3f4a5b"}'
        ).decode().rstrip("="),
    ],
)
async def test_invalid_cursor_is_rejected(client: AsyncClient, cursor: str) -> None:
    response = await client.get(POSTS_URL, params={"after": cursor})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid cursor"
    assert body["message"] == "Malformed cursor"


# ──────────────────────────────────────────────────────────────
# Create
# ──────────────────────────────────────────────────────────────


async def test_create_post(client: AsyncClient) -> None:
    response = await client.post(
        POSTS_URL,
        json={
            "content": "  hello world  ",
            "userId": "u1",
            "username": "ada",
            "displayName": "Ada Lovelace",
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["content"] == "hello world"
    assert body["likeCount"] == 0
    assert body["author"] == {
        "id": "u1",
        "username": "ada",
        "displayName": "Ada Lovelace",
        "avatar": None,
    }

    feed = (await client.get(POSTS_URL)).json()
    assert [item["id"] for item in feed["posts"]] == [body["id"]]


async def test_created_posts_list_newest_first(client: AsyncClient) -> None:
    created = []
    for index in range(3):
        response = await client.post(
            POSTS_URL,
            json={"content": f"#{index}", "userId": "u1", "username": "ada", "displayName": "Ada"},
        )
        created.append(response.json()["id"])

    feed = (await client.get(POSTS_URL)).json()

    assert [item["id"] for item in feed["posts"]] == list(reversed(created))


@pytest.mark.parametrize(
    "payload",
    [
        {"userId": "u1", "username": "ada", "displayName": "Ada"},
        {"content": "", "userId": "u1", "username": "ada", "displayName": "Ada"},
        {"content": "x" * 281, "userId": "u1", "username": "ada", "displayName": "Ada"},
        {"content": "hi", "username": "ada", "displayName": "Ada"},
    ],
)
async def test_create_post_validation(client: AsyncClient, payload: dict) -> None:
    response = await client.post(POSTS_URL, json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid request"
    assert body["errors"]


# ──────────────────────────────────────────────────────────────
# Likes
# ──────────────────────────────────────────────────────────────


async def test_like_toggle(client: AsyncClient, create_posts: PostFactory) -> None:
    (post,) = await create_posts(1)
    url = f"{POSTS_URL}/{post.id}/like"

    first = await client.post(url, json={"userId": "bob"})
    second = await client.post(url, json={"userId": "carol"})
    undo = await client.post(url, json={"userId": "bob"})

    assert first.json() == {"liked": True, "likesCount": 1}
    assert second.json() == {"liked": True, "likesCount": 2}
    assert undo.json() == {"liked": False, "likesCount": 1}

    feed = (await client.get(POSTS_URL)).json()
    assert feed["posts"][0]["likeCount"] == 1


async def test_like_requires_user_id(client: AsyncClient, create_posts: PostFactory) -> None:
    (post,) = await create_posts(1)

    response = await client.post(f"{POSTS_URL}/{post.id}/like", json={})

    assert response.status_code == 400


async def test_like_deleted_post_is_not_found(
    client: AsyncClient, create_posts: PostFactory
) -> None:
    (post,) = await create_posts(1)
    await client.request("DELETE", f"{POSTS_URL}/{post.id}", json={"userId": "alice"})

    response = await client.post(f"{POSTS_URL}/{post.id}/like", json={"userId": "bob"})

    assert response.status_code == 404
    assert response.json()["message"] == "Post not found"


# ──────────────────────────────────────────────────────────────
# Delete
# ──────────────────────────────────────────────────────────────


async def test_delete_post(client: AsyncClient, create_posts: PostFactory) -> None:
    (post,) = await create_posts(1)

    response = await client.request(
        "DELETE", f"{POSTS_URL}/{post.id}", json={"userId": "alice"}
    )
    repeat = await client.request("DELETE", f"{POSTS_URL}/{post.id}", json={"userId": "alice"})

    assert response.status_code == 200
    assert response.json() == {"message": "Post deleted successfully"}
    assert repeat.status_code == 404


async def test_delete_by_other_user_is_forbidden(
    client: AsyncClient, create_posts: PostFactory
) -> None:
    (post,) = await create_posts(1)

    response = await client.request("DELETE", f"{POSTS_URL}/{post.id}", json={"userId": "mallory"})

    assert response.status_code == 403
    assert response.json()["error"] == "Forbidden"
    assert response.json()["message"] == "Not authorized to delete this post"

    feed = (await client.get(POSTS_URL)).json()
    assert feed["pagination"]["count"] == 1


@pytest.mark.parametrize("post_id", [str(uuid4()), "not-a-uuid", "123"])
async def test_delete_unknown_post_is_not_found(client: AsyncClient, post_id: str) -> None:
    response = await client.request("DELETE", f"{POSTS_URL}/{post_id}", json={"userId": "alice"})

    assert response.status_code == 404
    assert response.json()["error"] == "Not found"
