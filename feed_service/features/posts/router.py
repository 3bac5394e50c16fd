"""API router for the posts feature.

Endpoints:
    GET    /posts                 - One feed page, newest first
    POST   /posts                 - Create a post
    POST   /posts/{post_id}/like  - Toggle the caller's like
    DELETE /posts/{post_id}       - Soft-delete a post owned by the caller

Example Usage:
    # First page
    GET /api/posts?limit=10

    # Next page
    GET /api/posts?limit=10&after=<pagination.nextCursor>

    # Create
    POST /api/posts
    {"content": "hello", "userId": "u1", "username": "ada", "displayName": "Ada"}
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from feed_service.core.dependencies.database import get_db_session
from feed_service.core.pagination import CursorPage
from feed_service.core.schemas.error import ErrorResponse, ValidationErrorResponse
from feed_service.features.posts.schemas import (
    LikeToggleResponse,
    MessageResponse,
    PostCreate,
    PostResponse,
    UserActionRequest,
)
from feed_service.features.posts.service import PostService

router = APIRouter(prefix="/posts", tags=["posts"])
logger = logging.getLogger(__name__)


def get_post_service(
    request: Request,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostService:
    return PostService(session, pagination=request.app.state.settings.pagination)


# ──────────────────────────────────────────────────────────────
# Feed
# ──────────────────────────────────────────────────────────────


@router.get(
    "",
    response_model=CursorPage[PostResponse],
    summary="List posts",
    description=(
        "Return live posts ordered newest first. Pass `pagination.nextCursor` "
        "from a previous response as `after` to continue."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Invalid cursor"},
        500: {"model": ErrorResponse, "description": "Posts could not be fetched"},
    },
)
async def list_posts(
    service: Annotated[PostService, Depends(get_post_service)],
    limit: Annotated[
        str | None,
        Query(description="Page size, clamped to 1..50; defaults to 10 when absent or not a number"),
    ] = None,
    after: Annotated[
        str | None,
        Query(description="Opaque cursor from a previous page"),
    ] = None,
) -> CursorPage[PostResponse]:
    """List one page of the feed."""
    return await service.list_posts(after, limit)


# ──────────────────────────────────────────────────────────────
# Writes
# ──────────────────────────────────────────────────────────────


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a post",
    responses={400: {"model": ValidationErrorResponse, "description": "Missing or invalid fields"}},
)
async def create_post(
    payload: PostCreate,
    service: Annotated[PostService, Depends(get_post_service)],
) -> PostResponse:
    """Create a post authored by the user described in the payload."""
    post = await service.create_post(payload)
    return PostResponse.from_post(post)


@router.post(
    "/{post_id}/like",
    response_model=LikeToggleResponse,
    summary="Toggle like",
    description="Like the post, or remove the like if this user already liked it.",
    responses={
        400: {"model": ValidationErrorResponse, "description": "userId is required"},
        404: {"model": ErrorResponse, "description": "Post not found"},
    },
)
async def toggle_like(
    post_id: str,
    payload: UserActionRequest,
    service: Annotated[PostService, Depends(get_post_service)],
) -> LikeToggleResponse:
    return await service.toggle_like(post_id, payload.user_id)


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    summary="Delete a post",
    description="Soft-delete a post. Only its author may delete it.",
    responses={
        403: {"model": ErrorResponse, "description": "Caller is not the author"},
        404: {"model": ErrorResponse, "description": "Post not found"},
    },
)
async def delete_post(
    post_id: str,
    payload: UserActionRequest,
    service: Annotated[PostService, Depends(get_post_service)],
) -> MessageResponse:
    await service.delete_post(post_id, payload.user_id)
    return MessageResponse(message="Post deleted successfully")
