from __future__ import annotations

from typing import List

from pymongo import DESCENDING
from pymongo.collection import Collection

from config.database import mongodb
from domain.models.comment import Comment
from utils.aggregation import resolve_reference_stages
from utils.dates import utcnow
from utils.ids import to_object_id


class CommentRepository:
    """CRUD operations for the comments collection."""

    def __init__(self, collection: Collection | None = None) -> None:
        self.collection: Collection = (
            collection if collection is not None else mongodb.collection("comments")
        )

    def create(self, comment: Comment) -> Comment:
        now = utcnow()
        comment = comment.model_copy(update={"created_at": now, "updated_at": now})
        result = self.collection.insert_one(comment.to_mongo())
        return comment.model_copy(update={"id": str(result.inserted_id)})

    def find_for_post(self, post_id: str) -> List[Comment]:
        """Comments on a post, newest first, with commenter name/image."""
        pipeline = [
            {"$match": {"post": to_object_id(post_id, field="post id")}},
            {"$sort": {"_id": DESCENDING}},
            *resolve_reference_stages("user"),
        ]
        return [Comment.from_mongo(doc) for doc in self.collection.aggregate(pipeline)]

    def delete(self, comment_id: str) -> int:
        result = self.collection.delete_one(
            {"_id": to_object_id(comment_id, field="comment id")}
        )
        return result.deleted_count

    def delete_for_post(self, post_id: str) -> int:
        result = self.collection.delete_many(
            {"post": to_object_id(post_id, field="post id")}
        )
        return result.deleted_count
