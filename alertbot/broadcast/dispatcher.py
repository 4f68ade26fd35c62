"""Broadcast dispatcher: best-effort fan-out of the tomorrow forecast."""

import logging
from collections.abc import Iterable

from alertbot.broadcast.formatter import format_tomorrow_message
from alertbot.messaging.viber_client import ViberClient, ViberClientError
from alertbot.models.forecast import ForecastSnapshot
from alertbot.models.messaging import Keyboard
from alertbot.models.reporting import DispatchResult

logger = logging.getLogger(__name__)


class BroadcastDispatcher:
    def __init__(self, client: ViberClient, keyboard: Keyboard | None = None):
        self.client = client
        self.keyboard = keyboard

    def dispatch(
        self, snapshot: ForecastSnapshot, recipients: Iterable[str]
    ) -> DispatchResult:
        """Format tomorrow's forecast and send it to every recipient.

        Formatting errors (ArrayIndexError, MissingFieldError) propagate
        before anything is sent. Per-recipient send failures are logged and
        skipped.
        """
        message = format_tomorrow_message(snapshot.tomorrow())
        return self.send_to_all(message, recipients)

    def send_to_all(self, message: str, recipients: Iterable[str]) -> DispatchResult:
        result = DispatchResult()
        for recipient in recipients:
            result.attempted.append(recipient)
            try:
                self.client.send_text(recipient, message, self.keyboard)
            except ViberClientError as e:
                result.failed.append(recipient)
                logger.warning("Could not send forecast to %s: %s", recipient, e)

        logger.info(
            "Broadcast sent to %d/%d recipients",
            result.delivered, len(result.attempted),
        )
        return result
