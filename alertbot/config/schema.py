"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field, model_validator

from alertbot.config.defaults import (
    DEFAULT_FORECAST_COMMAND,
    DEFAULT_LATITUDE,
    DEFAULT_LONGITUDE,
    DEFAULT_SENDER_NAME,
)


class RecipientPolicy(StrEnum):
    SUBSCRIBERS = "subscribers"  # every registry member
    ADMIN = "admin"  # the configured administrator only


class ForecastConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api_key: str = ""
    base_url: str = "https://api.darksky.net"
    latitude: float = Field(default=DEFAULT_LATITUDE, ge=-90.0, le=90.0)
    longitude: float = Field(default=DEFAULT_LONGITUDE, ge=-180.0, le=180.0)
    lang: str = "uk"
    units: str = "uk2"
    exclude: list[str] = ["hourly", "alerts"]
    extend: str | None = "hourly"
    timeout_seconds: float = Field(default=30.0, gt=0.0)


class ViberConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api_key: str = ""
    admin_id: str = ""
    base_url: str = "https://chatapi.viber.com"
    sender_name: str = DEFAULT_SENDER_NAME
    sender_avatar: str = ""
    min_api_version: int = Field(default=1, ge=1)
    timeout_seconds: float = Field(default=15.0, gt=0.0)


class ScheduleConfig(BaseModel):
    model_config = {"extra": "forbid"}

    interval_seconds: int = Field(default=60, ge=1)
    debug_interval_seconds: int = Field(default=6, ge=1)
    debug: bool = False
    broadcast_start_hour: int = Field(default=19, ge=0, le=23)
    broadcast_end_hour: int = Field(default=21, ge=0, le=23)
    utc_offset_hours: int = Field(default=2, ge=-12, le=14)
    min_broadcast_gap_seconds: int = Field(default=86400, ge=0)
    shutdown_timeout_seconds: float = Field(default=35.0, gt=0.0)

    @model_validator(mode="after")
    def _window_ordered(self) -> "ScheduleConfig":
        if self.broadcast_start_hour > self.broadcast_end_hour:
            raise ValueError("broadcast_start_hour must not exceed broadcast_end_hour")
        return self

    @property
    def effective_interval(self) -> int:
        return self.debug_interval_seconds if self.debug else self.interval_seconds


class BroadcastConfig(BaseModel):
    model_config = {"extra": "forbid"}

    recipients: RecipientPolicy = RecipientPolicy.SUBSCRIBERS
    forecast_command: str = DEFAULT_FORECAST_COMMAND


class ServerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=1, le=65535)


class BotConfig(BaseModel):
    model_config = {"extra": "forbid"}

    forecast: ForecastConfig = ForecastConfig()
    viber: ViberConfig = ViberConfig()
    schedule: ScheduleConfig = ScheduleConfig()
    broadcast: BroadcastConfig = BroadcastConfig()
    server: ServerConfig = ServerConfig()
