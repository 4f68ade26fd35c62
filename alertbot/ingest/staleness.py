"""Staleness check for the cached forecast snapshot."""

import logging
from datetime import UTC, datetime

from alertbot.errors import ArrayIndexError
from alertbot.models.common import utc_now
from alertbot.models.forecast import ForecastSnapshot

logger = logging.getLogger(__name__)


def is_snapshot_stale(
    snapshot: ForecastSnapshot | None, now: datetime | None = None
) -> bool:
    """True when a refetch is needed.

    The snapshot is fresh while its "today" point (index 1) carries the
    current UTC calendar date.
    """
    if snapshot is None:
        logger.debug("No cached forecast, refetch needed")
        return True
    if now is None:
        now = utc_now()
    elif now.tzinfo is not None:
        now = now.astimezone(UTC)
    try:
        reference = snapshot.today()
    except ArrayIndexError as e:
        logger.warning("Cached forecast unusable (%s), refetch needed", e)
        return True
    return reference.date != now.date()
