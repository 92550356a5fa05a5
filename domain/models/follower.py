from __future__ import annotations

from typing import ClassVar, Optional, Tuple, Union

from domain.models.base import MongoModel
from domain.models.user import UserProfile


class Follower(MongoModel):
    """``follower_id`` follows ``writer_id``."""

    reference_keys: ClassVar[Tuple[str, ...]] = ("writerId", "followerId")

    writer_id: str
    follower_id: Optional[Union[UserProfile, str]] = None
