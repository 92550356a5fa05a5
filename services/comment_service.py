"""Service helpers for post comments."""

from __future__ import annotations

import logging
from typing import List

from domain.models.comment import Comment
from middleware.errors import RecordNotFoundError, ValidationError
from repositories.comment_repository import CommentRepository
from repositories.post_repository import PostRepository

logger = logging.getLogger(__name__)

_posts = PostRepository()
_comments = CommentRepository()


def add_comment(post_id: str, user_id: str, text) -> Comment:
    """Create a comment and append its id to the post.

    Only a missing (``None``) body is rejected; empty strings are stored.
    """
    if text is None:
        raise ValidationError("Comment is required.", details={"field": "comment"})

    if not _posts.find_by_id(post_id):
        raise RecordNotFoundError("Post not found")

    comment = _comments.create(Comment(comment=text, user=user_id, post=post_id))
    _posts.push_comment(post_id, comment.id)
    logger.info("Comment %s added to post %s", comment.id, post_id)
    return comment


def list_comments(post_id: str) -> List[Comment]:
    return _comments.find_for_post(post_id)


def delete_comment(comment_id: str, post_id: str) -> None:
    """Delete a comment and pull its id from the parent post."""
    _comments.delete(comment_id)
    if _posts.pull_comment(post_id, comment_id) == 0:
        raise RecordNotFoundError("Post or comment not found")
    logger.info("Comment %s removed from post %s", comment_id, post_id)


__all__ = ["add_comment", "delete_comment", "list_comments"]
