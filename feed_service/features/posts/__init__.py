"""Posts feature: create, like, soft-delete and the paginated feed."""

from feed_service.features.posts.models import Post, post_likes
from feed_service.features.posts.repository import PostRepository, get_post_repository
from feed_service.features.posts.service import PostService

__all__ = [
    "Post",
    "PostRepository",
    "PostService",
    "get_post_repository",
    "post_likes",
]
