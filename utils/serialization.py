"""
Serialization helpers for turning models and aggregation rows into JSON-safe data.

Models are dumped by alias so the API speaks the same camelCase field names
the documents are stored with.
"""
from datetime import date, datetime
from typing import Any, Iterable, Optional

from bson import ObjectId
from pydantic import BaseModel


def serialize(value: Any, *, exclude: Optional[set] = None) -> Any:
    """
    Generic serializer for API payloads:
      • Pydantic models → dict by alias (datetimes as ISO strings)
      • ObjectId → hex string
      • datetime/date → ISO string
      • lists/dicts are walked recursively
    """
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude=exclude)
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: serialize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize(item, exclude=exclude) for item in value]
    return value


def serialize_many(values: Iterable[Any], *, exclude: Optional[set] = None) -> list:
    return [serialize(value, exclude=exclude) for value in values]


__all__ = ["serialize", "serialize_many"]
