# src/inkwell/db/time.py
"""Clock helpers shared by models and services."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


def epoch_millis() -> int:
    """Milliseconds since the Unix epoch, used to prefix stored file names."""
    return int(utcnow().timestamp() * 1000)
