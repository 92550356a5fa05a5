from __future__ import annotations

from typing import ClassVar, Optional, Tuple

from domain.models.base import MongoModel


class View(MongoModel):
    """One read of a post.

    ``user`` is the owner of the viewed post, which is what writer
    statistics count views by.
    """

    reference_keys: ClassVar[Tuple[str, ...]] = ("user", "post")

    user: Optional[str] = None
    post: str
