from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pymongo import DESCENDING
from pymongo.collection import Collection

from config.database import mongodb
from domain.models.follower import Follower
from utils.aggregation import (
    PROFILE_FIELDS,
    daily_counts_pipeline,
    paginate_stages,
    resolve_reference_stages,
)
from utils.dates import utcnow
from utils.ids import to_object_id


class FollowerRepository:
    """Follow relationships between readers and writers."""

    def __init__(self, collection: Collection | None = None) -> None:
        self.collection: Collection = (
            collection if collection is not None else mongodb.collection("followers")
        )

    def create(self, follower: Follower) -> Follower:
        now = utcnow()
        follower = follower.model_copy(update={"created_at": now, "updated_at": now})
        result = self.collection.insert_one(follower.to_mongo())
        return follower.model_copy(update={"id": str(result.inserted_id)})

    def find_relationship(self, writer_id: str, follower_id: str) -> Optional[Follower]:
        doc = self.collection.find_one(
            {
                "writerId": to_object_id(writer_id, field="writer id"),
                "followerId": to_object_id(follower_id, field="follower id"),
            }
        )
        return Follower.from_mongo(doc)

    def find_for_writer(self, writer_id: str, skip: int, limit: int) -> List[Follower]:
        """Most recent followers first, each resolved to a public profile."""
        pipeline = [
            {"$match": {"writerId": to_object_id(writer_id, field="writer id")}},
            {"$sort": {"_id": DESCENDING}},
            *paginate_stages(skip, limit),
            *resolve_reference_stages("followerId", PROFILE_FIELDS),
        ]
        return [Follower.from_mongo(doc) for doc in self.collection.aggregate(pipeline)]

    def daily_counts(self, writer_id: str, start: datetime, end: datetime) -> List[Dict[str, Any]]:
        pipeline = daily_counts_pipeline(
            {"writerId": to_object_id(writer_id, field="writer id")}, start, end
        )
        return list(self.collection.aggregate(pipeline))
