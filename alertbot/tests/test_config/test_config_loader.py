"""Tests for config loading, env overrides and dotted-key lookup."""

from pathlib import Path

import pytest

from alertbot.config.loader import get_config_value, load_config
from alertbot.config.schema import BotConfig, RecipientPolicy


class TestLoadConfig:
    def test_load_from_yaml(self, config_yaml_path: Path):
        config = load_config(config_yaml_path)
        assert config.viber.api_key == "yaml-viber-key"
        assert config.schedule.interval_seconds == 120

    def test_env_override_into_empty_section(self, tmp_path: Path, monkeypatch):
        path = tmp_path / "bare.yaml"
        path.write_text("viber:\nserver:\n")
        monkeypatch.setenv("VIBER_API_KEY", "env-viber-key")
        monkeypatch.setenv("PORT", "9191")
        config = load_config(path)
        assert config.viber.api_key == "env-viber-key"
        assert config.server.port == 9191

    def test_empty_yaml_uses_defaults(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        config = load_config(path)
        assert config == BotConfig()

    def test_missing_file_uses_defaults(self, tmp_path: Path):
        config = load_config(tmp_path / "nope.yaml")
        assert config.schedule.effective_interval == 60

    def test_fixtures_config(self, fixtures_dir: Path):
        config = load_config(fixtures_dir / "config_default.yaml")
        assert config.broadcast.recipients == RecipientPolicy.ADMIN
        assert config.schedule.effective_interval == 6

    def test_env_overrides(self, config_yaml_path: Path, monkeypatch):
        monkeypatch.setenv("VIBER_API_KEY", "env-viber-key")
        monkeypatch.setenv("FORECAST_API_KEY", "env-forecast-key")
        monkeypatch.setenv("VIBER_ADMIN_ID", "env-admin")
        monkeypatch.setenv("PORT", "9090")
        config = load_config(config_yaml_path)
        assert config.viber.api_key == "env-viber-key"
        assert config.viber.admin_id == "env-admin"
        assert config.forecast.api_key == "env-forecast-key"
        assert config.server.port == 9090
        # untouched YAML values survive
        assert config.schedule.interval_seconds == 120


class TestGetConfigValue:
    def test_dotted_key(self):
        assert get_config_value(BotConfig(), "schedule.broadcast_start_hour") == 19

    def test_list_index(self):
        assert get_config_value(BotConfig(), "forecast.exclude.1") == "alerts"

    def test_invalid_key(self):
        with pytest.raises(KeyError):
            get_config_value(BotConfig(), "nonexistent.key")
