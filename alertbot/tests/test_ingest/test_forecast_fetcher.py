"""Tests for forecast parsing and the fetcher with a mocked client."""

from datetime import date
from unittest.mock import MagicMock

import pytest

from alertbot.errors import MissingFieldError, NetworkError, ParseError
from alertbot.ingest.forecast_client import ForecastClient
from alertbot.ingest.forecast_fetcher import ForecastFetcher, parse_snapshot
from alertbot.models.forecast import PrecipKind


class TestParseSnapshot:
    def test_points_in_order(self, forecast_payload: dict):
        snapshot = parse_snapshot(forecast_payload, 123)
        assert snapshot.fetched_at == 123
        assert len(snapshot.points) == 4
        assert [p.date for p in snapshot.points] == [
            date(2026, 10, 18), date(2026, 10, 19),
            date(2026, 10, 20), date(2026, 10, 21),
        ]

    def test_tomorrow_fields(self, forecast_payload: dict):
        tomorrow = parse_snapshot(forecast_payload, 0).tomorrow()
        assert tomorrow.low == 2.0
        assert tomorrow.high == 7.0
        assert tomorrow.precip_kind is PrecipKind.RAIN
        assert tomorrow.precip_probability == 0.6
        assert tomorrow.summary == "Light rain in the afternoon."

    def test_absent_precip_type(self, forecast_payload: dict):
        today = parse_snapshot(forecast_payload, 0).today()
        assert today.precip_kind is None
        assert today.precip_probability == 0.0

    def test_missing_daily(self):
        with pytest.raises(MissingFieldError) as exc_info:
            parse_snapshot({"currently": {}}, 0)
        assert exc_info.value.name == "daily"

    def test_missing_daily_data(self):
        with pytest.raises(MissingFieldError, match="daily.data"):
            parse_snapshot({"daily": {"summary": "x"}}, 0)

    def test_missing_time(self):
        with pytest.raises(MissingFieldError, match="time"):
            parse_snapshot({"daily": {"data": [{"temperatureLow": 1.0}]}}, 0)

    def test_missing_temperatures_are_kept_absent(self):
        snapshot = parse_snapshot({"daily": {"data": [{"time": 1792530000}]}}, 0)
        assert snapshot.points[0].low is None
        assert snapshot.points[0].high is None

    def test_unknown_precip_type(self):
        raw = {"daily": {"data": [{"time": 1792530000, "precipType": "hail"}]}}
        with pytest.raises(ParseError, match="hail"):
            parse_snapshot(raw, 0)

    def test_non_numeric_temperature(self):
        raw = {"daily": {"data": [{"time": 1792530000, "temperatureHigh": "warm"}]}}
        with pytest.raises(ParseError, match="temperatureHigh"):
            parse_snapshot(raw, 0)

    def test_not_an_object(self):
        with pytest.raises(ParseError):
            parse_snapshot(["daily"], 0)

    def test_nan_time(self):
        raw = {"daily": {"data": [{"time": float("nan")}]}}
        with pytest.raises(ParseError, match="time"):
            parse_snapshot(raw, 0)

    def test_out_of_range_time(self):
        raw = {"daily": {"data": [{"time": 1e20}]}}
        with pytest.raises(ParseError, match="time"):
            parse_snapshot(raw, 0)

    def test_infinite_temperature(self):
        raw = {"daily": {"data": [{"time": 1792530000, "temperatureLow": float("inf")}]}}
        with pytest.raises(ParseError, match="temperatureLow"):
            parse_snapshot(raw, 0)

    def test_short_data_is_not_an_error(self):
        raw = {"daily": {"data": [{"time": 1792357200}]}}
        assert len(parse_snapshot(raw, 0).points) == 1


class TestForecastFetcher:
    def test_fetch_success(self, forecast_payload: dict):
        mock_client = MagicMock(spec=ForecastClient)
        mock_client.get_forecast.return_value = forecast_payload

        snapshot = ForecastFetcher(mock_client).fetch(now=42)
        assert snapshot.fetched_at == 42
        assert snapshot.is_usable
        mock_client.get_forecast.assert_called_once_with()

    def test_client_error_propagates(self):
        mock_client = MagicMock(spec=ForecastClient)
        mock_client.get_forecast.side_effect = NetworkError("down")

        with pytest.raises(NetworkError):
            ForecastFetcher(mock_client).fetch(now=42)
