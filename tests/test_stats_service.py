from datetime import datetime, timedelta, timezone

import pytest
from bson import ObjectId

import services.stats_service as stats_service
from middleware.errors import RecordNotFoundError
from repositories.follower_repository import FollowerRepository
from repositories.post_repository import PostRepository
from repositories.user_repository import UserRepository
from repositories.view_repository import ViewRepository

NOW = datetime(2024, 6, 30, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def stores(monkeypatch, make_collection):
    cols = {name: make_collection() for name in ("posts", "views", "users", "followers")}
    cols["views"].canned["$group"] = []
    cols["followers"].canned["$group"] = []
    monkeypatch.setattr(stats_service, "_posts", PostRepository(cols["posts"]))
    monkeypatch.setattr(stats_service, "_views", ViewRepository(cols["views"]))
    monkeypatch.setattr(stats_service, "_users", UserRepository(cols["users"]))
    monkeypatch.setattr(stats_service, "_followers", FollowerRepository(cols["followers"]))
    return cols


@pytest.fixture
def writer(stores):
    writer_id = ObjectId()
    stores["users"].insert_one(
        {
            "_id": writer_id,
            "name": "Writer",
            "email": "writer@example.com",
            "password": "hash",
            "accountType": "Writer",
            "followers": [ObjectId(), ObjectId(), ObjectId()],
        }
    )
    stores["users"].insert_one({"_id": ObjectId(), "name": "W2", "accountType": "Writer"})
    stores["users"].insert_one({"_id": ObjectId(), "name": "Reader", "accountType": "User"})
    return writer_id


def test_window_boundary_is_inclusive(stores, writer):
    views = stores["views"]
    start = NOW - timedelta(days=28)
    views.insert_one({"user": writer, "createdAt": start})
    views.insert_one({"user": writer, "createdAt": NOW})
    views.insert_one({"user": writer, "createdAt": start - timedelta(seconds=1)})
    views.insert_one({"user": ObjectId(), "createdAt": NOW})

    stats = stats_service.writer_stats(str(writer), 28, now=NOW)

    assert stats["totalViews"] == 2


def test_writer_stats_collects_every_figure(stores, writer):
    posts = stores["posts"]
    for days_ago in (1, 3, 40):
        posts.insert_one({"user": writer, "title": f"{days_ago}d", "createdAt": NOW - timedelta(days=days_ago)})
    stores["views"].canned["$group"] = [{"_id": "2024-06-29", "Total": 4}]
    stores["followers"].canned["$group"] = [
        {"_id": "2024-06-20", "Total": 1},
        {"_id": "2024-06-28", "Total": 2},
    ]

    stats = stats_service.writer_stats(str(writer), 28, now=NOW)

    assert stats["totalPosts"] == 2
    assert stats["totalWriters"] == 2
    assert stats["followers"] == 3
    assert stats["viewStats"] == [{"_id": "2024-06-29", "Total": 4}]
    assert [row["_id"] for row in stats["followersStats"]] == ["2024-06-20", "2024-06-28"]
    assert len(stats["last5Posts"]) == 3
    assert stats["last5Posts"][0].title == "40d"


def test_recent_lists_are_capped(stores, writer, monkeypatch):
    monkeypatch.setattr(stats_service.settings, "TOP_CONTENT_LIMIT", 5)
    for i in range(7):
        stores["posts"].insert_one({"user": writer, "title": f"P{i}", "createdAt": NOW})
        stores["followers"].insert_one({"writerId": writer, "followerId": ObjectId(), "createdAt": NOW})

    stats = stats_service.writer_stats(str(writer), 28, now=NOW)

    assert [p.title for p in stats["last5Posts"]] == ["P6", "P5", "P4", "P3", "P2"]
    assert len(stats["last5Followers"]) == 5


def test_stats_for_unknown_user(stores):
    with pytest.raises(RecordNotFoundError):
        stats_service.writer_stats(str(ObjectId()), 28, now=NOW)


def test_popular_content_returns_both_rankings(stores):
    stores["posts"].canned["$project"] = [{"_id": ObjectId(), "title": "Top", "views": 9}]
    stores["users"].canned["$project"] = [{"_id": ObjectId(), "name": "Star", "followers": 5}]

    content = stats_service.popular_content()

    assert content["posts"][0].views == 9
    assert content["writers"][0].name == "Star"
