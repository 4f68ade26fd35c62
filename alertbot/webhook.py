"""Inbound Viber webhook and status API (FastAPI).

The webhook always acknowledges with an empty 200 so the platform never
redelivers; any follow-up message is sent from a background task.
"""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import BackgroundTasks, FastAPI, Request
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from alertbot.config.defaults import WELCOME_TEXT
from alertbot.daemon import BotDaemon
from alertbot.messaging.viber_client import ViberClientError
from alertbot.models.common import epoch_to_iso
from alertbot.models.messaging import CallbackEvent

logger = logging.getLogger(__name__)


def create_app(bot: BotDaemon, run_scheduler: bool = True) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if run_scheduler:
            bot.start_background()
        try:
            yield
        finally:
            if run_scheduler:
                await asyncio.to_thread(bot.stop)

    app = FastAPI(title="Kyiv Alerts bot", version="0.1.0", lifespan=lifespan)
    app.state.bot = bot

    def _send_welcome(user_id: str) -> None:
        try:
            bot.viber.send_text(user_id, WELCOME_TEXT, bot.keyboard)
        except ViberClientError as e:
            logger.warning("Could not send welcome to %s: %s", user_id, e)

    @app.post("/api/viber/webhook", response_class=PlainTextResponse)
    async def viber_webhook(request: Request, background: BackgroundTasks):
        body = await request.body()
        try:
            event = CallbackEvent.model_validate_json(body)
        except ValidationError as e:
            logger.debug("Error parsing webhook json: %s", e)
            return ""

        logger.info("viber hook event=%s", event.event)
        if event.event == "conversation_started" and event.user is not None:
            background.add_task(_send_welcome, event.user.id)
        elif event.event == "message":
            sender_id = event.sender.id if event.sender else None
            text = event.message.text if event.message else None
            if sender_id and text == bot.config.broadcast.forecast_command:
                background.add_task(bot.responder.respond, sender_id)
            else:
                logger.debug("Ignoring message %r from %s", text, sender_id)
        return ""

    @app.get("/api/status")
    def get_status():
        """Bookkeeping, cached forecast and registry members."""
        state = bot.guard.read()
        snapshot = state.snapshot
        return {
            "last_broadcast_at": epoch_to_iso(state.bookkeeping.last_broadcast_at),
            "last_registry_refresh_at": epoch_to_iso(
                state.bookkeeping.last_registry_refresh_at
            ),
            "forecast": None if snapshot is None else {
                "fetched_at": epoch_to_iso(snapshot.fetched_at),
                "points": len(snapshot.points),
                "usable": snapshot.is_usable,
            },
            "members": [
                {"id": m.id, "name": m.name, "role": m.role} for m in state.registry
            ],
            "recipients": bot.config.broadcast.recipients.value,
            **bot.stats(),
        }

    @app.get("/api/health")
    def get_health():
        return {"ok": True}

    return app
