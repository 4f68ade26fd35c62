"""Bot daemon — drives the tick pipeline from a cancellable repeating timer.

Usage:
    python -m alertbot daemon --config ops/configs/bot.yaml   # scheduler only
    python -m alertbot serve  --config ops/configs/bot.yaml   # webhook + scheduler
"""

import logging
import os
import signal
import threading
from collections.abc import Callable

from alertbot.broadcast.dispatcher import BroadcastDispatcher
from alertbot.config.defaults import default_keyboard
from alertbot.config.schema import BotConfig
from alertbot.ingest.forecast_client import ForecastClient
from alertbot.ingest.forecast_fetcher import ForecastFetcher
from alertbot.messaging.viber_client import ViberClient
from alertbot.models.common import epoch_now
from alertbot.models.reporting import TickSummary
from alertbot.pipeline.on_demand import OnDemandResponder
from alertbot.pipeline.tick_pipeline import TickPipeline
from alertbot.state.engine_state import StateGuard

logger = logging.getLogger(__name__)


class RepeatingTimer:
    """Runs `tick` on a background thread every `interval` seconds.

    The first tick runs immediately. Ticks never overlap. `stop()` prevents
    new ticks and waits up to `timeout` for the in-flight one.
    """

    def __init__(self, interval: float, tick: Callable[[], object], name: str = "tick-timer"):
        self.interval = interval
        self.tick = tick
        self.name = name
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.is_running:
            raise RuntimeError(f"{self.name} already running")
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = None) -> bool:
        """Stop scheduling ticks. Returns False if the thread outlived `timeout`."""
        self._stop.set()
        if self._thread is None:
            return True
        self._thread.join(timeout)
        stopped = not self._thread.is_alive()
        if not stopped:
            logger.warning("%s still busy after %ss, abandoning", self.name, timeout)
        return stopped

    def request_stop(self) -> None:
        self._stop.set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until stop() is called. Returns True if stopped."""
        return self._stop.wait(timeout)

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                self.tick()
            except Exception:
                logger.exception("Tick crashed")
            self._stop.wait(self.interval)


class BotDaemon:
    """Owns the shared state and wires clients, pipeline and timer together."""

    def __init__(
        self,
        config: BotConfig,
        forecast_client: ForecastClient | None = None,
        viber: ViberClient | None = None,
        clock: Callable[[], int] = epoch_now,
    ):
        self.config = config
        self.guard = StateGuard()
        self.viber = viber or ViberClient(config.viber)
        self.keyboard = default_keyboard(config.broadcast.forecast_command)

        fetcher = ForecastFetcher(forecast_client or ForecastClient(config.forecast))
        self.pipeline = TickPipeline(
            config,
            self.guard,
            fetcher,
            self.viber,
            BroadcastDispatcher(self.viber, self.keyboard),
            clock=clock,
        )
        self.responder = OnDemandResponder(self.guard, self.viber, self.keyboard)
        self.timer = RepeatingTimer(config.schedule.effective_interval, self.run_one_tick)

        self._stats_lock = threading.Lock()
        self._total_ticks = 0
        self._ticks_with_errors = 0
        self._last_tick: TickSummary | None = None

    def run_one_tick(self) -> TickSummary:
        summary = self.pipeline.run()
        with self._stats_lock:
            self._total_ticks += 1
            if summary.errors:
                self._ticks_with_errors += 1
            self._last_tick = summary

        if summary.errors:
            logger.warning("Tick #%d finished with errors: %s", self._total_ticks, summary.errors)
        else:
            logger.debug(
                "Tick #%d OK — stale=%s fetched=%s due=%s dispatched=%s",
                self._total_ticks, summary.stale, summary.fetched,
                summary.broadcast_due, summary.dispatched,
            )
        return summary

    def stats(self) -> dict:
        with self._stats_lock:
            return {
                "total_ticks": self._total_ticks,
                "ticks_with_errors": self._ticks_with_errors,
                "last_tick_at": self._last_tick.now if self._last_tick else None,
                "scheduler_running": self.timer.is_running,
            }

    # --- Lifecycle ---

    def start_background(self) -> None:
        logger.info(
            "Scheduler started — interval=%ds recipients=%s pid=%d",
            self.timer.interval, self.config.broadcast.recipients.value, os.getpid(),
        )
        self.timer.start()

    def stop(self) -> bool:
        stopped = self.timer.stop(self.config.schedule.shutdown_timeout_seconds)
        logger.info(
            "Scheduler stopped — %d ticks (%d with errors)",
            self._total_ticks, self._ticks_with_errors,
        )
        return stopped

    def run_forever(self) -> None:
        """Foreground mode: run until SIGTERM/SIGINT."""
        self._setup_signals()
        self.start_background()
        try:
            self.timer.wait()
        except KeyboardInterrupt:
            logger.info("Daemon interrupted by keyboard")
        finally:
            self.stop()

    def _setup_signals(self) -> None:
        """Handle SIGTERM and SIGINT for graceful shutdown."""
        def _stop(signum: int, frame: object) -> None:
            logger.info("Received %s, shutting down gracefully...", signal.Signals(signum).name)
            self.timer.request_stop()

        signal.signal(signal.SIGTERM, _stop)
        signal.signal(signal.SIGINT, _stop)
