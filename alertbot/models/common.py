"""Common time helpers shared across models."""

import time
from datetime import UTC, date, datetime, timedelta, timezone


def utc_now() -> datetime:
    return datetime.now(UTC)


def epoch_now() -> int:
    return int(time.time())


def utc_date(epoch_seconds: float) -> date:
    return datetime.fromtimestamp(epoch_seconds, UTC).date()


def local_time(epoch_seconds: float, utc_offset_hours: int) -> datetime:
    """Wall-clock time at a fixed UTC offset (no DST rules)."""
    tz = timezone(timedelta(hours=utc_offset_hours))
    return datetime.fromtimestamp(epoch_seconds, tz)


def epoch_to_iso(epoch_seconds: int) -> str | None:
    if not epoch_seconds:
        return None
    return datetime.fromtimestamp(epoch_seconds, UTC).isoformat()
