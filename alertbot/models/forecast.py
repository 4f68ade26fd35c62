"""Daily forecast data models."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from alertbot.errors import ArrayIndexError

TODAY_INDEX = 1
TOMORROW_INDEX = 2


class PrecipKind(StrEnum):
    NONE = "none"
    RAIN = "rain"
    SNOW = "snow"
    SLEET = "sleet"

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class DailyPoint:
    time: int  # provider epoch seconds, local midnight of the location
    date: date  # UTC calendar date of `time`
    low: float | None = None
    high: float | None = None
    precip_kind: PrecipKind | None = None
    precip_probability: float | None = None
    summary: str | None = None


@dataclass(frozen=True)
class ForecastSnapshot:
    """One parsed provider response.

    Index 1 is the "today" reference point and index 2 is "tomorrow": the
    provider stamps days at local midnight, which falls on the previous UTC
    day, so point dates are shifted by one relative to their index.
    """

    fetched_at: int
    points: tuple[DailyPoint, ...]

    def point(self, index: int) -> DailyPoint:
        if index < 0 or index >= len(self.points):
            raise ArrayIndexError(index, len(self.points))
        return self.points[index]

    def today(self) -> DailyPoint:
        return self.point(TODAY_INDEX)

    def tomorrow(self) -> DailyPoint:
        return self.point(TOMORROW_INDEX)

    @property
    def is_usable(self) -> bool:
        return len(self.points) > TOMORROW_INDEX
