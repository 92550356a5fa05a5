from __future__ import annotations

from enum import StrEnum
from typing import ClassVar, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from domain.models.base import MongoModel


class AccountType(StrEnum):
    USER = "User"
    WRITER = "Writer"


class Author(BaseModel):
    """Name and image of the user who wrote a post or comment."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(default=None, alias="_id")
    name: Optional[str] = None
    image: Optional[str] = None


class UserProfile(MongoModel):
    """Public projection of a user; never carries the password."""

    reference_list_keys: ClassVar[Tuple[str, ...]] = ("followers",)

    name: Optional[str] = None
    email: Optional[str] = None
    image: Optional[str] = None
    account_type: Optional[AccountType] = None
    followers: List[str] = Field(default_factory=list)


class User(UserProfile):
    """User entity stored in MongoDB."""

    name: str = Field(..., min_length=1, description="Display name")
    email: EmailStr = Field(..., description="Unique login email")
    password: Optional[str] = Field(default=None, description="Hashed password")
    account_type: AccountType = AccountType.USER

    def to_profile(self) -> UserProfile:
        return UserProfile.model_validate(
            self.model_dump(by_alias=True, exclude={"password"})
        )


class WriterRank(MongoModel):
    """Row of the most-followed writers ranking."""

    name: Optional[str] = None
    image: Optional[str] = None
    followers: int = 0
