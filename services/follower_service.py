"""Service helpers for follow relationships and public profiles."""

from __future__ import annotations

import logging

from domain.models.follower import Follower
from domain.models.user import UserProfile
from middleware.errors import DuplicateRecordError, RecordNotFoundError, ValidationError
from repositories.follower_repository import FollowerRepository
from repositories.user_repository import UserRepository
from utils.pagination import Page, PageRequest

logger = logging.getLogger(__name__)

_users = UserRepository()
_followers = FollowerRepository()


def get_profile(user_id: str) -> UserProfile:
    user = _users.get_by_id(user_id)
    if not user:
        raise RecordNotFoundError("User not found")
    return user


def list_followers(user_id: str, page_request: PageRequest) -> Page:
    """Followers of ``user_id``, most recently followed first."""
    user = get_profile(user_id)
    followers = _followers.find_for_writer(user_id, page_request.skip, page_request.limit)
    return Page(items=followers, total=len(user.followers), request=page_request)


def follow_writer(follower_id: str, writer_id: str) -> Follower:
    """Record that ``follower_id`` follows ``writer_id``."""
    if follower_id == writer_id:
        raise ValidationError("You cannot follow yourself.")

    get_profile(writer_id)
    if _followers.find_relationship(writer_id, follower_id):
        raise DuplicateRecordError("You already follow this writer.")

    relationship = _followers.create(Follower(writer_id=writer_id, follower_id=follower_id))
    _users.push_follower(writer_id, relationship.id)
    logger.info("User %s now follows writer %s", follower_id, writer_id)
    return relationship


__all__ = ["follow_writer", "get_profile", "list_followers"]
