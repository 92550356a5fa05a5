from __future__ import annotations

from datetime import datetime
from typing import Any, ClassVar, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from utils.ids import stringify_ids, to_object_id


def _reference_id(value: Any):
    # populated references are dumped as nested profile dicts
    if isinstance(value, dict):
        value = value.get("_id")
    return to_object_id(value)


class MongoModel(BaseModel):
    """Base for documents stored in MongoDB.

    Python attributes are snake_case; the stored document and the API use the
    camelCase aliases. ``reference_keys`` / ``reference_list_keys`` name the
    (aliased) fields holding ObjectId references so ``to_mongo`` can convert
    them back from their string form.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
    )

    reference_keys: ClassVar[Tuple[str, ...]] = ()
    reference_list_keys: ClassVar[Tuple[str, ...]] = ()

    id: Optional[str] = Field(default=None, alias="_id", description="MongoDB identifier")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_mongo(self) -> dict:
        data = self.model_dump(by_alias=True, exclude_none=True)
        for key in ("_id", *self.reference_keys):
            if data.get(key) is not None:
                data[key] = _reference_id(data[key])
        for key in self.reference_list_keys:
            data[key] = [_reference_id(item) for item in data.get(key, [])]
        return data

    @classmethod
    def from_mongo(cls, doc: dict | None):
        if not doc:
            return None
        return cls.model_validate(stringify_ids(doc))
