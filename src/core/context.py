"""Per-call execution context handed to pallet calls."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from src.core.types import AccountId, BlockNumber


@dataclass(slots=True)
class EventBuffer:
    """Collects events deposited by one call until the runtime flushes them."""

    _events: list[Any] = field(default_factory=list)

    def deposit(self, event: Any) -> None:
        self._events.append(event)

    def drain(self) -> list[Any]:
        drained, self._events = self._events, []
        return drained

    def __len__(self) -> int:
        return len(self._events)


@dataclass(slots=True)
class CallContext:
    """Authenticated caller, current height and event sink for a single call."""

    caller: AccountId
    height: BlockNumber
    events: EventBuffer = field(default_factory=EventBuffer)

    def deposit_event(self, event: Any) -> None:
        self.events.deposit(event)
