from __future__ import annotations

from typing import ClassVar, Optional, Tuple, Union

from domain.models.base import MongoModel
from domain.models.user import Author


class Comment(MongoModel):
    reference_keys: ClassVar[Tuple[str, ...]] = ("user", "post")

    comment: Optional[str] = None
    user: Optional[Union[Author, str]] = None
    post: Optional[str] = None
