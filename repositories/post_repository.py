from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection

from config.database import mongodb
from domain.models.post import Post, PostRank
from utils.aggregation import paginate_stages, resolve_reference_stages
from utils.dates import utcnow
from utils.ids import to_object_id

NEWEST_FIRST = {"_id": DESCENDING}


class PostRepository:
    """Repository for blog posts and their comment/view reference arrays."""

    def __init__(self, collection: Collection | None = None) -> None:
        self.collection: Collection = (
            collection if collection is not None else mongodb.collection("posts")
        )

    def create(self, post: Post) -> Post:
        """Insert a new post document and return it with its id."""
        now = utcnow()
        post = post.model_copy(update={"created_at": now, "updated_at": now})
        doc = post.to_mongo()
        result = self.collection.insert_one(doc)
        return post.model_copy(update={"id": str(result.inserted_id)})

    def find_by_id(self, post_id: str, *, with_author: bool = False) -> Optional[Post]:
        """Find a post, optionally resolving its author to name/image."""
        match = {"$match": {"_id": to_object_id(post_id, field="post id")}}
        if not with_author:
            doc = self.collection.find_one(match["$match"])
            return Post.from_mongo(doc)
        pipeline = [match, *resolve_reference_stages("user")]
        return Post.from_mongo(next(iter(self.collection.aggregate(pipeline)), None))

    def count(self, query: Dict[str, Any]) -> int:
        return self.collection.count_documents(query)

    def count_created_between(self, user_id: str, start: datetime, end: datetime) -> int:
        return self.collection.count_documents(
            {
                "user": to_object_id(user_id, field="user id"),
                "createdAt": {"$gte": start, "$lte": end},
            }
        )

    def find_page(
        self,
        query: Dict[str, Any],
        skip: int,
        limit: int,
        *,
        with_author: bool = False,
    ) -> List[Post]:
        """Newest-first slice of the posts matching ``query``."""
        pipeline: List[Dict[str, Any]] = [
            {"$match": query},
            {"$sort": NEWEST_FIRST},
            *paginate_stages(skip, limit),
        ]
        if with_author:
            pipeline.extend(resolve_reference_stages("user"))
        return [Post.from_mongo(doc) for doc in self.collection.aggregate(pipeline)]

    def find_recent_by_user(self, user_id: str, limit: int) -> List[Post]:
        cursor = (
            self.collection.find({"user": to_object_id(user_id, field="user id")})
            .sort(list(NEWEST_FIRST.items()))
            .limit(limit)
        )
        return [Post.from_mongo(doc) for doc in cursor]

    def update_status(self, post_id: str, status: bool) -> Optional[Post]:
        """Set the publication flag and return the updated post."""
        doc = self.collection.find_one_and_update(
            {"_id": to_object_id(post_id, field="post id")},
            {"$set": {"status": status, "updatedAt": utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
        return Post.from_mongo(doc)

    def _push(self, post_id: str, field: str, ref_id: str) -> int:
        result = self.collection.update_one(
            {"_id": to_object_id(post_id, field="post id")},
            {"$push": {field: to_object_id(ref_id)}},
        )
        return result.matched_count

    def push_comment(self, post_id: str, comment_id: str) -> int:
        """Atomically append a comment id; returns the number of posts matched."""
        return self._push(post_id, "comments", comment_id)

    def push_view(self, post_id: str, view_id: str) -> int:
        """Atomically append a view id; returns the number of posts matched."""
        return self._push(post_id, "views", view_id)

    def pull_comment(self, post_id: str, comment_id: str) -> int:
        """Remove a comment id from the post; returns the modified count."""
        result = self.collection.update_one(
            {"_id": to_object_id(post_id, field="post id")},
            {"$pull": {"comments": to_object_id(comment_id, field="comment id")}},
        )
        return result.modified_count

    def delete_owned(self, post_id: str, user_id: str) -> Optional[Post]:
        """Delete a post only if ``user_id`` owns it; return the deleted post."""
        doc = self.collection.find_one_and_delete(
            {
                "_id": to_object_id(post_id, field="post id"),
                "user": to_object_id(user_id, field="user id"),
            }
        )
        return Post.from_mongo(doc)

    def most_viewed(self, limit: int) -> List[PostRank]:
        """Published posts ranked by the size of their views array."""
        pipeline = [
            {"$match": {"status": True}},
            {
                "$project": {
                    "title": 1,
                    "slug": 1,
                    "img": 1,
                    "category": 1,
                    "views": {"$size": {"$ifNull": ["$views", []]}},
                    "createdAt": 1,
                }
            },
            {"$sort": {"views": DESCENDING}},
            {"$limit": limit},
        ]
        return [PostRank.from_mongo(doc) for doc in self.collection.aggregate(pipeline)]
