"""Service helpers for writing, publishing, reading and deleting posts."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from domain.models.post import Post
from domain.models.view import View
from middleware.errors import RecordNotFoundError, ValidationError
from repositories.comment_repository import CommentRepository
from repositories.post_repository import PostRepository
from repositories.view_repository import ViewRepository
from utils.ids import to_object_id
from utils.pagination import Page, PageRequest

logger = logging.getLogger(__name__)

_posts = PostRepository()
_comments = CommentRepository()
_views = ViewRepository()

POST_CONTENT_FIELDS = ("description", "img", "title", "category")
MISSING_CONTENT_MESSAGE = (
    "All fields are required. Please enter a description, title, category and select image."
)


def create_post(user_id: str, data: Dict[str, Any]) -> Post:
    """Create a post owned by ``user_id``.

    Only a payload where every content field is empty is rejected; a post with
    just a title is accepted.
    """
    if not any(data.get(field) for field in POST_CONTENT_FIELDS):
        raise ValidationError(MISSING_CONTENT_MESSAGE)

    post = Post(
        user=user_id,
        description=data.get("description"),
        img=data.get("img"),
        title=data.get("title"),
        slug=data.get("slug"),
        category=data.get("category"),
    )
    created = _posts.create(post)
    logger.info("Post %s created by user %s", created.id, user_id)
    return created


def list_owner_posts(user_id: str, page_request: PageRequest) -> Page:
    """All posts of ``user_id`` (any status), newest first."""
    query = {"user": to_object_id(user_id, field="user id")}
    total = _posts.count(query)
    posts = _posts.find_page(query, page_request.skip, page_request.limit)
    return Page(items=posts, total=total, request=page_request)


def published_posts_query(
    category: Optional[str] = None, writer_id: Optional[str] = None
) -> Dict[str, Any]:
    """Filter for the public listing; ``category`` wins over ``writer_id``."""
    query: Dict[str, Any] = {"status": True}
    if category:
        query["category"] = category
    elif writer_id:
        query["user"] = to_object_id(writer_id, field="writer id")
    return query


def list_published_posts(
    page_request: PageRequest,
    *,
    category: Optional[str] = None,
    writer_id: Optional[str] = None,
) -> Page:
    query = published_posts_query(category, writer_id)
    logger.debug("Public post listing query: %s", query)
    total = _posts.count(query)
    posts = _posts.find_page(
        query, page_request.skip, page_request.limit, with_author=True
    )
    return Page(items=posts, total=total, request=page_request)


def update_post_status(post_id: str, status: Any) -> Post:
    """Publish or unpublish a post. Either direction is allowed."""
    if not isinstance(status, bool):
        raise ValidationError("status must be true or false", details={"field": "status"})
    post = _posts.update_status(post_id, status)
    if not post:
        raise RecordNotFoundError("Post not found")
    return post


def get_post_and_record_view(post_id: str) -> Post:
    """Return a post with its author and log one more view of it.

    Every call records a new view, even for identical repeated reads.
    """
    post = _posts.find_by_id(post_id, with_author=True)
    if not post:
        raise RecordNotFoundError("Post not found")

    view = _views.create(View(user=post.owner_id, post=post.id))
    _posts.push_view(post.id, view.id)
    return post.model_copy(update={"views": [*post.views, view.id]})


def delete_post(post_id: str, user_id: str) -> None:
    """Delete a post owned by ``user_id`` together with its comments and views."""
    deleted = _posts.delete_owned(post_id, user_id)
    if not deleted:
        raise RecordNotFoundError("Post not found")

    removed_comments = _comments.delete_for_post(post_id)
    removed_views = _views.delete_for_post(post_id)
    logger.info(
        "Post %s deleted by user %s (%d comments, %d views removed)",
        post_id,
        user_id,
        removed_comments,
        removed_views,
    )


__all__ = [
    "create_post",
    "delete_post",
    "get_post_and_record_view",
    "list_owner_posts",
    "list_published_posts",
    "published_posts_query",
    "update_post_status",
]
