from __future__ import annotations

from typing import ClassVar, List, Optional, Tuple, Union

from pydantic import Field

from domain.models.base import MongoModel
from domain.models.user import Author


class Post(MongoModel):
    """Blog post; ``comments`` and ``views`` hold ids of the related documents."""

    reference_keys: ClassVar[Tuple[str, ...]] = ("user",)
    reference_list_keys: ClassVar[Tuple[str, ...]] = ("comments", "views")

    user: Optional[Union[Author, str]] = None
    title: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    img: Optional[str] = None
    category: Optional[str] = None
    status: bool = True
    comments: List[str] = Field(default_factory=list)
    views: List[str] = Field(default_factory=list)

    @property
    def owner_id(self) -> Optional[str]:
        if isinstance(self.user, Author):
            return self.user.id
        return self.user


class PostRank(MongoModel):
    """Row of the most-viewed posts ranking; ``views`` is a count here."""

    title: Optional[str] = None
    slug: Optional[str] = None
    img: Optional[str] = None
    category: Optional[str] = None
    views: int = 0
