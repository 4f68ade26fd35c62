"""Tests for config schema validation."""

import pytest
from pydantic import ValidationError

from alertbot.config.schema import (
    BotConfig,
    BroadcastConfig,
    RecipientPolicy,
    ScheduleConfig,
)


class TestBotConfig:
    def test_defaults(self):
        config = BotConfig()
        assert config.forecast.latitude == 50.4501
        assert config.forecast.exclude == ["hourly", "alerts"]
        assert config.schedule.interval_seconds == 60
        assert config.broadcast.recipients == RecipientPolicy.SUBSCRIBERS

    def test_extra_fields_rejected(self):
        with pytest.raises(ValidationError, match="Extra inputs are not permitted"):
            BotConfig(unknown_field="bad")

    def test_nested_extra_fields_rejected(self):
        with pytest.raises(ValidationError, match="Extra inputs are not permitted"):
            ScheduleConfig(interval_seconds=10, bogus=True)

    def test_recipient_policy_from_string(self):
        config = BroadcastConfig(recipients="admin")
        assert config.recipients == RecipientPolicy.ADMIN

    def test_unknown_recipient_policy_rejected(self):
        with pytest.raises(ValidationError):
            BroadcastConfig(recipients="everyone")


class TestScheduleConfig:
    def test_production_interval(self):
        assert ScheduleConfig().effective_interval == 60

    def test_debug_interval(self):
        assert ScheduleConfig(debug=True).effective_interval == 6

    def test_inverted_window_rejected(self):
        with pytest.raises(ValidationError, match="broadcast_start_hour"):
            ScheduleConfig(broadcast_start_hour=22, broadcast_end_hour=19)

    def test_hour_out_of_range(self):
        with pytest.raises(ValidationError):
            ScheduleConfig(broadcast_end_hour=24)
