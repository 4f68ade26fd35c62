"""Broadcast gate: is the evening forecast broadcast due?"""

from alertbot.models.common import local_time

MIN_GAP_SECONDS = 60 * 60 * 24
WINDOW_START_HOUR = 19
WINDOW_END_HOUR = 21
UTC_OFFSET_HOURS = 2


def due_to_broadcast(
    now: float,
    last_broadcast_at: float,
    *,
    start_hour: int = WINDOW_START_HOUR,
    end_hour: int = WINDOW_END_HOUR,
    utc_offset_hours: int = UTC_OFFSET_HOURS,
    min_gap_seconds: int = MIN_GAP_SECONDS,
) -> bool:
    """True iff more than a day passed since the last broadcast and the
    local hour of `now` is inside the inclusive window."""
    if now - last_broadcast_at <= min_gap_seconds:
        return False
    hour = local_time(now, utc_offset_hours).hour
    return start_hour <= hour <= end_hour
