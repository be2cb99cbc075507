"""Timestamp helpers shared by records and engines."""

from __future__ import annotations

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return UTC datetime for default timestamps."""
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def resolve_now(now: datetime | None) -> datetime:
    """Return the caller's clock reading, or the wall clock when omitted."""
    return as_utc(now) if now is not None else utc_now()
