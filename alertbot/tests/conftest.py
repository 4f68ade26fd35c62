"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import yaml

from alertbot.config.schema import BotConfig, ForecastConfig, ViberConfig
from alertbot.ingest.forecast_fetcher import parse_snapshot
from alertbot.models.forecast import ForecastSnapshot
from alertbot.tests.timepoints import NOON


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep real secrets in the environment out of config loading."""
    for var in ("FORECAST_API_KEY", "VIBER_API_KEY", "VIBER_ADMIN_ID", "PORT"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def default_config() -> BotConfig:
    return BotConfig(
        forecast=ForecastConfig(
            api_key="test-forecast-key",
            base_url="https://test-forecast.example.com",
        ),
        viber=ViberConfig(
            api_key="test-viber-key",
            admin_id="admin-1",
            base_url="https://test-viber.example.com",
        ),
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "viber": {"api_key": "yaml-viber-key"},
        "schedule": {"interval_seconds": 120},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def forecast_payload(fixtures_dir: Path) -> dict:
    with open(fixtures_dir / "darksky_forecast_kyiv.json") as f:
        return json.load(f)


@pytest.fixture
def kyiv_snapshot(forecast_payload: dict) -> ForecastSnapshot:
    return parse_snapshot(forecast_payload, NOON)
