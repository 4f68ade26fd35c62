"""On-demand responder: tomorrow's forecast for a single requesting user."""

import logging

from alertbot.broadcast.formatter import format_tomorrow_message
from alertbot.errors import ForecastError
from alertbot.messaging.viber_client import ViberClient, ViberClientError
from alertbot.models.messaging import Keyboard
from alertbot.state.engine_state import StateGuard

logger = logging.getLogger(__name__)


class OnDemandResponder:
    """Answers from the cached snapshot; never touches broadcast bookkeeping."""

    def __init__(
        self, guard: StateGuard, client: ViberClient, keyboard: Keyboard | None = None
    ):
        self.guard = guard
        self.client = client
        self.keyboard = keyboard

    def respond(self, user_id: str) -> bool:
        """Send tomorrow's forecast to `user_id`. Returns True if sent."""
        snapshot = self.guard.read().snapshot
        if snapshot is None:
            logger.info("Forecast requested by %s but nothing is cached yet", user_id)
            return False

        try:
            message = format_tomorrow_message(snapshot.tomorrow())
        except ForecastError as e:
            logger.warning("Cannot answer forecast request from %s: %s", user_id, e)
            return False

        try:
            self.client.send_text(user_id, message, self.keyboard)
        except ViberClientError as e:
            logger.warning("Could not send forecast to %s: %s", user_id, e)
            return False
        logger.info("Sent on-demand forecast to %s", user_id)
        return True
