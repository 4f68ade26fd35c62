"""Forecast fetcher: one provider call parsed into a ForecastSnapshot."""

import logging
import math

from alertbot.errors import MissingFieldError, ParseError
from alertbot.ingest.forecast_client import ForecastClient
from alertbot.models.common import epoch_now, utc_date
from alertbot.models.forecast import DailyPoint, ForecastSnapshot, PrecipKind

logger = logging.getLogger(__name__)


class ForecastFetcher:
    def __init__(self, client: ForecastClient):
        self.client = client

    def fetch(self, now: int | None = None) -> ForecastSnapshot:
        """Fetch and parse the daily forecast.

        Raises a ForecastError subclass on any failure; the caller decides
        what to keep.
        """
        raw = self.client.get_forecast()
        snapshot = parse_snapshot(raw, now if now is not None else epoch_now())
        logger.info(
            "Parsed forecast with %d daily points", len(snapshot.points)
        )
        return snapshot


def parse_snapshot(raw: object, fetched_at: int) -> ForecastSnapshot:
    if not isinstance(raw, dict):
        raise ParseError(f"Expected a JSON object, got {type(raw).__name__}")
    daily = raw.get("daily")
    if daily is None:
        raise MissingFieldError("daily")
    if not isinstance(daily, dict):
        raise ParseError("'daily' is not an object")
    data = daily.get("data")
    if data is None:
        raise MissingFieldError("daily.data")
    if not isinstance(data, list):
        raise ParseError("'daily.data' is not a list")

    points = tuple(_parse_point(p) for p in data)
    return ForecastSnapshot(fetched_at=fetched_at, points=points)


def _parse_point(p: object) -> DailyPoint:
    if not isinstance(p, dict):
        raise ParseError("daily point is not an object")
    if "time" not in p:
        raise MissingFieldError("time")
    time_raw = _number(p, "time")
    try:
        time = int(time_raw)
        date = utc_date(time)
    except (ValueError, OverflowError, OSError) as e:
        raise ParseError(f"'time' is not a valid epoch: {time_raw!r}") from e
    kind_raw = p.get("precipType")
    try:
        kind = PrecipKind(kind_raw) if kind_raw is not None else None
    except ValueError as e:
        raise ParseError(f"Unknown precipType: {kind_raw!r}") from e

    summary = p.get("summary")
    return DailyPoint(
        time=time,
        date=date,
        low=_optional_number(p, "temperatureLow"),
        high=_optional_number(p, "temperatureHigh"),
        precip_kind=kind,
        precip_probability=_optional_number(p, "precipProbability"),
        summary=summary if isinstance(summary, str) else None,
    )


def _number(p: dict, key: str) -> float:
    value = p[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ParseError(f"'{key}' is not a number: {value!r}")
    try:
        number = float(value)
    except OverflowError as e:
        raise ParseError(f"'{key}' is out of range: {value!r}") from e
    if not math.isfinite(number):
        raise ParseError(f"'{key}' is not finite: {value!r}")
    return number


def _optional_number(p: dict, key: str) -> float | None:
    if p.get(key) is None:
        return None
    return _number(p, key)
