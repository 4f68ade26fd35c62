"""Default location, sender identity and quick-reply keyboard."""

from alertbot.models.messaging import Button, Keyboard

# Kyiv
DEFAULT_LATITUDE = 50.4501
DEFAULT_LONGITUDE = 30.5234

DEFAULT_SENDER_NAME = "Kyiv Alerts"
DEFAULT_FORECAST_COMMAND = "forecast_kiev_tomorrow"
WELCOME_TEXT = "Welcome to Kyiv Alerts"


def default_keyboard(forecast_command: str = DEFAULT_FORECAST_COMMAND) -> Keyboard:
    return Keyboard(
        buttons=(
            Button(action_body=forecast_command, text="Weather For Tomorrow"),
        )
    )
