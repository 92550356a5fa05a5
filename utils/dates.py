"""Utility helpers for the day-window used by writer statistics."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Tuple

from middleware.errors import ValidationError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_window_days(raw: Any, default: int, *, max_days: int) -> int:
    """Turn the ``query`` parameter into a day count; falsy/invalid -> default.

    Windows longer than ``max_days`` (in either direction) are rejected.
    """
    try:
        days = int(raw)
    except (TypeError, ValueError):
        return default
    if abs(days) > max_days:
        raise ValidationError(
            f"query must be at most {max_days} days", details={"field": "query"}
        )
    return days or default


def activity_window(days: int, now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """Return ``(start, end)`` covering the last ``days`` days, both inclusive."""
    end = now or utcnow()
    try:
        return end - timedelta(days=days), end
    except OverflowError:
        raise ValidationError("Date window out of range", details={"field": "query"})


__all__ = ["activity_window", "parse_window_days", "utcnow"]
