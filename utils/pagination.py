"""Page/limit handling shared by every list endpoint.

Query parameters arrive as strings; anything missing, non-numeric or zero
falls back to the handler default, the way ``Number(value) || default``
behaves in the dashboards that call us.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import ceil
from typing import Any, Mapping

from config import settings
from middleware.errors import ValidationError


def _int_or_default(raw: Any, default: int) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value or default


@dataclass(frozen=True)
class PageRequest:
    page: int = 1
    limit: int = 8

    def __post_init__(self) -> None:
        if self.page < 1 or self.limit < 1:
            raise ValueError("page and limit must be positive")

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    def num_of_pages(self, total: int) -> int:
        return ceil(total / self.limit)

    @classmethod
    def from_args(
        cls,
        args: Mapping[str, Any],
        *,
        default_limit: int,
        max_limit: int | None = None,
        max_page: int | None = None,
    ) -> "PageRequest":
        """Build a request from query args.

        ``limit`` is capped at ``max_limit``; a ``page`` past ``max_page`` is
        rejected so the skip offset always fits the store's 64-bit integers.
        """
        max_limit = max_limit or settings.MAX_PAGE_SIZE
        max_page = max_page or settings.MAX_PAGE
        page = max(_int_or_default(args.get("page"), 1), 1)
        limit = min(max(_int_or_default(args.get("limit"), default_limit), 1), max_limit)
        if page > max_page:
            raise ValidationError(
                f"page must be at most {max_page}", details={"field": "page"}
            )
        return cls(page=page, limit=limit)


@dataclass
class Page:
    """One slice of a paginated listing."""

    items: list
    total: int
    request: PageRequest

    @property
    def page(self) -> int:
        return self.request.page

    @property
    def num_of_pages(self) -> int:
        return self.request.num_of_pages(self.total)


__all__ = ["Page", "PageRequest"]
