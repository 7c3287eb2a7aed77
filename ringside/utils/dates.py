"""Timestamp helpers shared by models, repositories and services.

Every datetime persisted by the application is stored as a *naive* UTC value.
SQLite drops timezone information on the way in while PostgreSQL keeps it, so
normalising at the boundary keeps comparisons between freshly created objects
and rows loaded from either backend well defined.
"""

from __future__ import annotations

from datetime import UTC, datetime

__all__ = ["resolve_effective_date", "resolve_immediate_date", "to_utc_naive", "utcnow"]


def utcnow() -> datetime:
    """Return the current UTC time without tzinfo."""

    return datetime.now(UTC).replace(tzinfo=None)


def to_utc_naive(value: datetime | None) -> datetime | None:
    """Convert ``value`` to naive UTC, leaving naive inputs untouched."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def resolve_effective_date(value: datetime | None) -> datetime:
    """Return the moment an action takes effect, defaulting to now."""

    resolved = to_utc_naive(value)
    return resolved if resolved is not None else utcnow()


def resolve_immediate_date(value: datetime | None) -> datetime:
    """Like :func:`resolve_effective_date` but never later than now.

    Only employments and activations may be scheduled ahead of time; every
    other action takes effect immediately when given a future date.
    """

    resolved = resolve_effective_date(value)
    return min(resolved, utcnow())
