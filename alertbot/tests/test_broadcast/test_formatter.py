"""Tests for forecast message formatting."""

from datetime import date

import pytest

from alertbot.broadcast.formatter import format_tomorrow_message
from alertbot.errors import MissingFieldError
from alertbot.models.forecast import DailyPoint, PrecipKind


def _point(**kwargs) -> DailyPoint:
    fields = {
        "time": 1792530000,
        "date": date(2026, 10, 20),
        "low": 2.0,
        "high": 7.0,
        "precip_kind": PrecipKind.RAIN,
        "precip_probability": 0.6,
    }
    fields.update(kwargs)
    return DailyPoint(**fields)


class TestFormatTomorrowMessage:
    def test_full_message(self):
        msg = format_tomorrow_message(_point())
        assert "20.10" in msg
        assert "2.0–7.0" in msg
        assert "Rain" in msg
        assert "60%" in msg

    def test_no_precipitation(self):
        msg = format_tomorrow_message(_point(precip_kind=None, precip_probability=0.3))
        assert "None" in msg
        assert "0%" in msg

    def test_kind_without_probability(self):
        msg = format_tomorrow_message(_point(precip_kind=PrecipKind.SNOW, precip_probability=None))
        assert "Snow, probability 0%" in msg

    def test_negative_temperatures(self):
        msg = format_tomorrow_message(_point(low=-3.0, high=-0.5))
        assert "-3.0–-0.5" in msg

    @pytest.mark.parametrize("field", ["low", "high"])
    def test_missing_temperature(self, field):
        with pytest.raises(MissingFieldError) as exc_info:
            format_tomorrow_message(_point(**{field: None}))
        assert exc_info.value.name == field
