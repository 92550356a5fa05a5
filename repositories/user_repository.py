from __future__ import annotations

from typing import List, Optional

from pymongo import DESCENDING
from pymongo.collection import Collection

from config.database import mongodb
from domain.models.user import AccountType, User, UserProfile, WriterRank
from utils.dates import utcnow
from utils.ids import to_object_id

WITHOUT_PASSWORD = {"password": 0}


class UserRepository:
    """CRUD operations for users collection."""

    def __init__(self, collection: Collection | None = None) -> None:
        self.collection: Collection = (
            collection if collection is not None else mongodb.collection("users")
        )

    def create(self, user: User) -> str:
        now = utcnow()
        user = user.model_copy(update={"created_at": now, "updated_at": now})
        result = self.collection.insert_one(user.to_mongo())
        return str(result.inserted_id)

    def get_by_id(self, user_id: str) -> Optional[UserProfile]:
        """Public profile of a user (password excluded)."""
        doc = self.collection.find_one(
            {"_id": to_object_id(user_id, field="user id")}, WITHOUT_PASSWORD
        )
        return UserProfile.from_mongo(doc)

    def get_by_email(self, email: str) -> Optional[User]:
        """Full user document, password hash included, for authentication."""
        doc = self.collection.find_one({"email": email.strip().lower()})
        return User.from_mongo(doc)

    def count_by_account_type(self, account_type: AccountType) -> int:
        return self.collection.count_documents({"accountType": account_type.value})

    def push_follower(self, user_id: str, follower_doc_id: str) -> int:
        """Atomically append a follower-relationship id to the user."""
        result = self.collection.update_one(
            {"_id": to_object_id(user_id, field="user id")},
            {
                "$push": {"followers": to_object_id(follower_doc_id)},
                "$set": {"updatedAt": utcnow()},
            },
        )
        return result.matched_count

    def most_followed_writers(self, limit: int) -> List[WriterRank]:
        """Non-reader accounts ranked by the size of their followers array."""
        pipeline = [
            {"$match": {"accountType": {"$ne": AccountType.USER.value}}},
            {
                "$project": {
                    "name": 1,
                    "image": 1,
                    "followers": {"$size": {"$ifNull": ["$followers", []]}},
                }
            },
            {"$sort": {"followers": DESCENDING}},
            {"$limit": limit},
        ]
        return [WriterRank.from_mongo(doc) for doc in self.collection.aggregate(pipeline)]
