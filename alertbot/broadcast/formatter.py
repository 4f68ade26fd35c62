"""Human-readable forecast message formatting."""

from alertbot.errors import MissingFieldError
from alertbot.models.forecast import DailyPoint, PrecipKind


def format_tomorrow_message(point: DailyPoint) -> str:
    """Message for the "tomorrow" point.

    Raises MissingFieldError when either temperature is absent. A missing
    precipitation kind reads as "None" with 0% probability.
    """
    if point.low is None:
        raise MissingFieldError("low")
    if point.high is None:
        raise MissingFieldError("high")

    kind = point.precip_kind or PrecipKind.NONE
    probability = 0.0
    if point.precip_kind is not None and point.precip_probability is not None:
        probability = point.precip_probability

    return (
        f"Forecast for tomorrow {point.date.day:02d}.{point.date.month:02d}:\n"
        f"Temperature: {point.low:.1f}–{point.high:.1f}\n"
        f"Precipitation: {kind.label}, probability {probability * 100:.0f}%"
    )
