"""Shared engine state and the single lock that guards it.

The scheduler thread and webhook handlers only ever see immutable
EngineState instances. Every mutation builds a new instance and swaps it in
under the lock, so a reader never observes a half-applied update. Callers
must not hold the lock across network calls; the guard only exposes
in-memory read and swap operations.
"""

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from alertbot.models.forecast import ForecastSnapshot
from alertbot.models.messaging import Subscriber, SubscriberRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BroadcastBookkeeping:
    last_broadcast_at: int = 0  # epoch seconds, 0 = never
    last_registry_refresh_at: int = 0


@dataclass(frozen=True)
class EngineState:
    snapshot: ForecastSnapshot | None = None
    bookkeeping: BroadcastBookkeeping = field(default_factory=BroadcastBookkeeping)
    registry: SubscriberRegistry = field(default_factory=SubscriberRegistry)


class StateGuard:
    def __init__(self, initial: EngineState | None = None):
        self._lock = threading.Lock()
        self._state = initial or EngineState()

    def read(self) -> EngineState:
        with self._lock:
            return self._state

    def install_snapshot(self, snapshot: ForecastSnapshot) -> None:
        """Replace the cached forecast wholesale."""
        with self._lock:
            self._state = replace(self._state, snapshot=snapshot)
        logger.debug("Installed forecast fetched at %d", snapshot.fetched_at)

    def replace_subscribers(self, members: Iterable[Subscriber], now: int) -> int:
        """Install a complete new registry. Returns its size."""
        registry = SubscriberRegistry.from_members(members)
        with self._lock:
            self._state = replace(
                self._state,
                registry=registry,
                bookkeeping=replace(
                    self._state.bookkeeping, last_registry_refresh_at=now
                ),
            )
        return len(registry)

    def mark_broadcast(self, now: int) -> None:
        with self._lock:
            self._state = replace(
                self._state,
                bookkeeping=replace(self._state.bookkeeping, last_broadcast_at=now),
            )
