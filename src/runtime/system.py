"""Host-side system state: block number and the event log."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from src.core.types import BlockNumber, EventRecord, Phase


@dataclass
class System:
    """Tracks the current block and collects events deposited during it."""

    block_number: BlockNumber = 0
    phase: Phase = field(default_factory=Phase.initialization)
    _events: list[EventRecord] = field(default_factory=list)

    def set_block_number(self, number: BlockNumber) -> None:
        number = int(number)
        if number < 0:
            raise ValueError(f"Block number must be non-negative, got {number}.")
        self.block_number = number

    def initialize(self, number: BlockNumber) -> None:
        """Start a new block: set its number and clear the previous event log."""

        self.set_block_number(number)
        self.phase = Phase.initialization()
        self.reset_events()

    def note_extrinsic(self, index: int) -> None:
        self.phase = Phase.apply_extrinsic(index)

    def finalize(self) -> None:
        self.phase = Phase.finalization()

    def deposit_event(self, event: Any) -> None:
        self._events.append(EventRecord(phase=self.phase, event=event, block_number=self.block_number))

    def events(self) -> list[EventRecord]:
        return list(self._events)

    def reset_events(self) -> None:
        self._events.clear()
