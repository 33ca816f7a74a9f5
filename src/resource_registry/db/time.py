"""Time utilities for database models."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


def epoch_seconds(moment: datetime | None = None) -> int:
    """Return ``moment`` (default: now) as whole Unix epoch seconds.

    ``resources.create_time`` is stored in this unit.
    """
    moment = moment or utcnow()
    return int(moment.timestamp())
