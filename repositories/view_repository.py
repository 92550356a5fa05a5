from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List

from pymongo.collection import Collection

from config.database import mongodb
from domain.models.view import View
from utils.aggregation import daily_counts_pipeline
from utils.dates import utcnow
from utils.ids import to_object_id


class ViewRepository:
    """Append-only log of post reads."""

    def __init__(self, collection: Collection | None = None) -> None:
        self.collection: Collection = (
            collection if collection is not None else mongodb.collection("views")
        )

    def create(self, view: View) -> View:
        now = utcnow()
        view = view.model_copy(update={"created_at": now, "updated_at": now})
        result = self.collection.insert_one(view.to_mongo())
        return view.model_copy(update={"id": str(result.inserted_id)})

    def count_between(self, user_id: str, start: datetime, end: datetime) -> int:
        """Views on posts owned by ``user_id`` inside the window."""
        return self.collection.count_documents(
            {
                "user": to_object_id(user_id, field="user id"),
                "createdAt": {"$gte": start, "$lte": end},
            }
        )

    def daily_counts(self, user_id: str, start: datetime, end: datetime) -> List[Dict[str, Any]]:
        pipeline = daily_counts_pipeline(
            {"user": to_object_id(user_id, field="user id")}, start, end
        )
        return list(self.collection.aggregate(pipeline))

    def delete_for_post(self, post_id: str) -> int:
        result = self.collection.delete_many(
            {"post": to_object_id(post_id, field="post id")}
        )
        return result.deleted_count
