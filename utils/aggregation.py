"""Aggregation pipeline builders shared by the repositories."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List

DAY_FORMAT = "%Y-%m-%d"

PUBLIC_AUTHOR_FIELDS = ("name", "image")
PROFILE_FIELDS = ("name", "email", "image", "accountType", "followers")


def daily_counts_pipeline(
    match: Dict[str, Any],
    start: datetime,
    end: datetime,
    *,
    date_field: str = "createdAt",
) -> List[Dict[str, Any]]:
    """Count documents per calendar day of ``date_field`` inside ``[start, end]``.

    Output rows look like ``{"_id": "2024-05-01", "Total": 3}`` sorted by day.
    Days with no documents are not emitted.
    """
    return [
        {"$match": {**match, date_field: {"$gte": start, "$lte": end}}},
        {
            "$group": {
                "_id": {"$dateToString": {"format": DAY_FORMAT, "date": f"${date_field}"}},
                "Total": {"$sum": 1},
            }
        },
        {"$sort": {"_id": 1}},
    ]


def resolve_reference_stages(
    local_field: str,
    fields=PUBLIC_AUTHOR_FIELDS,
    *,
    from_collection: str = "users",
) -> List[Dict[str, Any]]:
    """Replace the ObjectId in ``local_field`` with the referenced document.

    Only ``fields`` (plus ``_id``) are kept, so secrets such as the password
    never leave the users collection. Dangling references resolve to ``None``.
    """
    return [
        {
            "$lookup": {
                "from": from_collection,
                "localField": local_field,
                "foreignField": "_id",
                "as": local_field,
                "pipeline": [{"$project": {name: 1 for name in fields}}],
            }
        },
        {"$unwind": {"path": f"${local_field}", "preserveNullAndEmptyArrays": True}},
    ]


def paginate_stages(skip: int, limit: int) -> List[Dict[str, Any]]:
    return [{"$skip": skip}, {"$limit": limit}]


__all__ = [
    "DAY_FORMAT",
    "PROFILE_FIELDS",
    "PUBLIC_AUTHOR_FIELDS",
    "daily_counts_pipeline",
    "paginate_stages",
    "resolve_reference_stages",
]
