"""Tick pipeline: one scheduler pass of fetch, refresh, gate and broadcast."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from alertbot.broadcast.dispatcher import BroadcastDispatcher
from alertbot.broadcast.gate import due_to_broadcast
from alertbot.config.schema import BotConfig, RecipientPolicy
from alertbot.errors import ForecastError
from alertbot.ingest.forecast_fetcher import ForecastFetcher
from alertbot.ingest.staleness import is_snapshot_stale
from alertbot.messaging.viber_client import ViberClient, ViberClientError
from alertbot.models.common import epoch_now
from alertbot.models.reporting import TickSummary
from alertbot.state.engine_state import EngineState, StateGuard

logger = logging.getLogger(__name__)


class TickPipeline:
    def __init__(
        self,
        config: BotConfig,
        guard: StateGuard,
        fetcher: ForecastFetcher,
        viber: ViberClient,
        dispatcher: BroadcastDispatcher,
        clock: Callable[[], int] = epoch_now,
    ):
        self.config = config
        self.guard = guard
        self.fetcher = fetcher
        self.viber = viber
        self.dispatcher = dispatcher
        self.clock = clock

    def run(self) -> TickSummary:
        """Execute one tick.

        The guard is taken only for the in-memory steps; fetch, directory
        refresh and sends all run with it released.
        """
        now = int(self.clock())
        summary = TickSummary(now=now)

        # 1. STALENESS
        state = self.guard.read()
        summary.stale = is_snapshot_stale(
            state.snapshot, datetime.fromtimestamp(now, UTC)
        )

        if summary.stale:
            # 2. FETCH
            self._refetch(now, summary)
            # 3. REGISTRY: follows every refetch attempt, even a failed one
            self._refresh_registry(now, summary)
        else:
            logger.debug("Cached forecast is current, skipping fetch")

        # 4. GATE
        state = self.guard.read()
        sched = self.config.schedule
        summary.broadcast_due = due_to_broadcast(
            now,
            state.bookkeeping.last_broadcast_at,
            start_hour=sched.broadcast_start_hour,
            end_hour=sched.broadcast_end_hour,
            utc_offset_hours=sched.utc_offset_hours,
            min_gap_seconds=sched.min_broadcast_gap_seconds,
        )
        if not summary.broadcast_due:
            logger.debug(
                "Broadcast not due (last at %d)", state.bookkeeping.last_broadcast_at
            )
            return summary

        # 5. DISPATCH
        self._broadcast(now, state, summary)
        return summary

    def _refetch(self, now: int, summary: TickSummary) -> None:
        try:
            snapshot = self.fetcher.fetch(now)
        except ForecastError as e:
            logger.error("Error while requesting forecast: %s", e)
            summary.errors.append(f"fetch: {e}")
            return
        self.guard.install_snapshot(snapshot)
        summary.fetched = True

    def _refresh_registry(self, now: int, summary: TickSummary) -> None:
        try:
            members = self.viber.get_members()
        except ViberClientError as e:
            logger.warning("Failed to read subscribers: %s", e)
            summary.errors.append(f"registry: {e}")
            return
        count = self.guard.replace_subscribers(members, now)
        summary.registry_refreshed = True
        logger.info("Subscriber registry refreshed: %d members", count)

    def _recipients(self, state: EngineState) -> list[str]:
        if self.config.broadcast.recipients == RecipientPolicy.ADMIN:
            admin_id = self.config.viber.admin_id
            return [admin_id] if admin_id else []
        return state.registry.ids()

    def _broadcast(self, now: int, state: EngineState, summary: TickSummary) -> None:
        snapshot = state.snapshot
        if snapshot is None or not snapshot.is_usable:
            logger.warning("Broadcast due but no usable forecast is cached")
            summary.errors.append("broadcast: no usable forecast")
            return

        recipients = self._recipients(state)
        if not recipients:
            logger.warning(
                "Broadcast due but no recipients (policy=%s)",
                self.config.broadcast.recipients.value,
            )

        try:
            result = self.dispatcher.dispatch(snapshot, recipients)
        except ForecastError as e:
            logger.error("Error broadcasting weather forecast: %s", e)
            summary.errors.append(f"broadcast: {e}")
            return

        self.guard.mark_broadcast(now)
        summary.dispatched = True
        summary.recipients_attempted = len(result.attempted)
        summary.recipients_failed = len(result.failed)
