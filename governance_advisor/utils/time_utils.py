"""Time helpers shared by the engine and the rules engine."""

from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def utc_isoformat(dt: datetime | None = None) -> str:
    """ISO-8601 string with a trailing ``Z``, e.g. ``2026-02-24T15:00:00.123Z``."""
    dt = dt or utcnow()
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def epoch_millis(dt: datetime | None = None) -> int:
    """Milliseconds since the Unix epoch."""
    dt = dt or utcnow()
    return int(dt.timestamp() * 1000)
