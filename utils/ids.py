"""Helpers for converting between API identifiers and MongoDB ObjectIds."""

from __future__ import annotations

from typing import Any

from bson import ObjectId

from middleware.errors import InvalidIdentifierError


def to_object_id(value: Any, *, field: str = "id") -> ObjectId:
    """Return ``value`` as an ObjectId or raise ``InvalidIdentifierError``."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    raise InvalidIdentifierError(
        f"Invalid {field}: {value!r}", details={"field": field}
    )


def stringify_ids(value: Any) -> Any:
    """Recursively replace ObjectIds with their hex strings."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {key: stringify_ids(item) for key, item in value.items()}
    if isinstance(value, list):
        return [stringify_ids(item) for item in value]
    return value


__all__ = ["stringify_ids", "to_object_id"]
