"""Viber REST bot API client: account directory and text messages."""

import logging

import httpx

from alertbot.config.schema import ViberConfig
from alertbot.models.messaging import Keyboard, Subscriber

logger = logging.getLogger(__name__)

TRACKING_DATA = "tracking data"


class ViberClientError(Exception):
    """Raised when the Viber API call fails or reports a non-zero status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ViberClient:
    """Thin wrapper around the Viber Public Account REST API.

    Viber answers most failures with HTTP 200 and a non-zero `status` in
    the JSON body, so both are checked.
    """

    def __init__(self, config: ViberConfig):
        if not config.api_key:
            raise ViberClientError("VIBER_API_KEY not set")
        self.config = config

    def _headers(self) -> dict[str, str]:
        return {
            "X-Viber-Auth-Token": self.config.api_key,
            "Content-Type": "application/json",
        }

    def _post(self, endpoint: str, data: dict) -> dict:
        url = f"{self.config.base_url}{endpoint}"
        try:
            resp = httpx.post(
                url, headers=self._headers(), json=data,
                timeout=self.config.timeout_seconds,
            )
        except httpx.RequestError as e:
            logger.error("Viber API request failed: %s -> %s", endpoint, e)
            raise ViberClientError(f"Request failed: {e}") from e

        if resp.status_code >= 400:
            raise ViberClientError(f"HTTP {resp.status_code}: {resp.text}", resp.status_code)
        try:
            body = resp.json()
        except ValueError as e:
            raise ViberClientError(f"Invalid JSON from {endpoint}: {e}") from e
        status = body.get("status", 0) if isinstance(body, dict) else None
        if status != 0:
            message = body.get("status_message", "") if isinstance(body, dict) else body
            raise ViberClientError(f"Viber status {status}: {message}")
        return body

    # --- Directory ---

    def get_members(self) -> list[Subscriber]:
        """Full current member list of the bot's account."""
        body = self._post("/pa/get_account_info", {})
        raw_members = body.get("members") or []
        if not isinstance(raw_members, list):
            raise ViberClientError(f"Malformed member list: {raw_members!r}")
        members = []
        for m in raw_members:
            try:
                members.append(
                    Subscriber(
                        id=str(m["id"]),
                        name=m.get("name", ""),
                        role=m.get("role", ""),
                        avatar=m.get("avatar"),
                    )
                )
            except (KeyError, TypeError) as e:
                raise ViberClientError(f"Malformed member entry: {m!r}") from e
        return members

    # --- Messages ---

    def send_text(
        self, receiver: str, text: str, keyboard: Keyboard | None = None
    ) -> dict:
        payload: dict = {
            "receiver": receiver,
            "min_api_version": self.config.min_api_version,
            "sender": {
                "name": self.config.sender_name,
                "avatar": self.config.sender_avatar,
            },
            "tracking_data": TRACKING_DATA,
            "type": "text",
            "text": text,
        }
        if keyboard is not None:
            payload["keyboard"] = keyboard.to_payload()
        return self._post("/pa/send_message", payload)
