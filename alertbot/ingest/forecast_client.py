"""Dark Sky style forecast API client. One request per call, no retry."""

import logging

import httpx

from alertbot.config.schema import ForecastConfig
from alertbot.errors import NetworkError, NonSuccessStatusError, ParseError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "alertbot/0.1.0"


class ForecastClient:
    def __init__(
        self,
        config: ForecastConfig,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.config = config
        self.user_agent = user_agent

    def _url(self) -> str:
        c = self.config
        return f"{c.base_url}/forecast/{c.api_key}/{c.latitude},{c.longitude}"

    def _params(self) -> dict[str, str]:
        c = self.config
        params = {"lang": c.lang, "units": c.units}
        if c.exclude:
            params["exclude"] = ",".join(c.exclude)
        if c.extend:
            params["extend"] = c.extend
        return params

    def get_forecast(self) -> dict:
        """Fetch the forecast for the configured location.

        Retries are left to the caller's next scheduler tick.
        """
        logger.info("Requesting weather forecast")
        try:
            resp = httpx.get(
                self._url(),
                params=self._params(),
                headers={"User-Agent": self.user_agent, "Accept": "application/json"},
                timeout=self.config.timeout_seconds,
            )
        except httpx.RequestError as e:
            raise NetworkError(f"Forecast request failed: {e}") from e

        if not resp.is_success:
            raise NonSuccessStatusError(resp.status_code, resp.text)
        try:
            return resp.json()
        except ValueError as e:
            raise ParseError(f"Forecast response is not JSON: {e}") from e
