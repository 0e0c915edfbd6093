"""Lightweight runtime profiling helpers."""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator


@dataclass(slots=True)
class PerfTracker:
    """Collects named wall-clock durations and sample counts when enabled."""

    enabled: bool = False
    _durations: dict[str, float] = field(default_factory=dict)
    _counts: dict[str, int] = field(default_factory=dict)

    @contextmanager
    def time(self, name: str) -> Iterator[None]:
        if not self.enabled:
            yield
            return
        started = time.perf_counter()
        try:
            yield
        finally:
            self._durations[name] = self._durations.get(name, 0.0) + time.perf_counter() - started
            self._counts[name] = self._counts.get(name, 0) + 1

    def as_dict(self) -> dict[str, float]:
        output: dict[str, float] = {}
        for name in sorted(self._durations):
            total = float(self._durations[name])
            output[f"{name}_total_s"] = total
            output[f"{name}_mean_s"] = total / max(self._counts.get(name, 1), 1)
        return output
