"""Tick and dispatch reporting models."""

from dataclasses import dataclass, field


@dataclass
class DispatchResult:
    attempted: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    @property
    def delivered(self) -> int:
        return len(self.attempted) - len(self.failed)


@dataclass
class TickSummary:
    now: int
    stale: bool = False
    fetched: bool = False
    registry_refreshed: bool = False
    broadcast_due: bool = False
    dispatched: bool = False
    recipients_attempted: int = 0
    recipients_failed: int = 0
    errors: list[str] = field(default_factory=list)
