"""Writer dashboard statistics and the public popularity rankings.

Every figure comes from its own query; nothing is shared between them and a
failure in any one of them fails the whole request.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from config import settings
from domain.models.user import AccountType
from middleware.errors import RecordNotFoundError
from repositories.follower_repository import FollowerRepository
from repositories.post_repository import PostRepository
from repositories.user_repository import UserRepository
from repositories.view_repository import ViewRepository
from utils.dates import activity_window

_posts = PostRepository()
_views = ViewRepository()
_users = UserRepository()
_followers = FollowerRepository()


def writer_stats(user_id: str, days: int, *, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Collect the analytics shown on a writer's dashboard for the last ``days`` days."""
    user = _users.get_by_id(user_id)
    if not user:
        raise RecordNotFoundError("User not found")

    start, end = activity_window(days, now)
    recent = settings.TOP_CONTENT_LIMIT

    return {
        "totalPosts": _posts.count_created_between(user_id, start, end),
        "totalViews": _views.count_between(user_id, start, end),
        "totalWriters": _users.count_by_account_type(AccountType.WRITER),
        "followers": len(user.followers),
        "viewStats": _views.daily_counts(user_id, start, end),
        "followersStats": _followers.daily_counts(user_id, start, end),
        "last5Followers": _followers.find_for_writer(user_id, 0, recent),
        "last5Posts": _posts.find_recent_by_user(user_id, recent),
    }


def popular_content() -> Dict[str, Any]:
    limit = settings.TOP_CONTENT_LIMIT
    return {
        "posts": _posts.most_viewed(limit),
        "writers": _users.most_followed_writers(limit),
    }


__all__ = ["popular_content", "writer_stats"]
