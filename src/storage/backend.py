"""In-memory key-value storage backend with nested transactional overlays."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from src.core.exceptions import StorageError


@dataclass
class InMemoryBackend:
    """Byte-keyed state with a stack of uncommitted write overlays.

    Writes always land in the innermost open transaction. Committing merges
    the overlay into its parent (or the committed state); rolling back drops
    it. Reads see the merged view from innermost to committed state.
    """

    _state: dict[bytes, bytes] = field(default_factory=dict)
    _overlays: list[dict[bytes, bytes]] = field(default_factory=list)

    @property
    def transaction_depth(self) -> int:
        return len(self._overlays)

    def get(self, key: bytes) -> bytes | None:
        for overlay in reversed(self._overlays):
            if key in overlay:
                return overlay[key]
        return self._state.get(key)

    def contains(self, key: bytes) -> bool:
        return self.get(key) is not None

    def set(self, key: bytes, value: bytes) -> None:
        target = self._overlays[-1] if self._overlays else self._state
        target[bytes(key)] = bytes(value)

    def iter_prefix(self, prefix: bytes) -> Iterator[tuple[bytes, bytes]]:
        merged = {k: v for k, v in self._state.items() if k.startswith(prefix)}
        for overlay in self._overlays:
            merged.update({k: v for k, v in overlay.items() if k.startswith(prefix)})
        for key in sorted(merged):
            yield key, merged[key]

    def start_transaction(self) -> None:
        self._overlays.append({})

    def commit_transaction(self) -> None:
        if not self._overlays:
            raise StorageError("Cannot commit: no open storage transaction.")
        overlay = self._overlays.pop()
        target = self._overlays[-1] if self._overlays else self._state
        target.update(overlay)

    def rollback_transaction(self) -> None:
        if not self._overlays:
            raise StorageError("Cannot roll back: no open storage transaction.")
        self._overlays.pop()

    @contextmanager
    def transactional(self) -> Iterator[None]:
        """Commit on normal exit, roll back and re-raise on any exception."""

        self.start_transaction()
        try:
            yield
        except BaseException:
            self.rollback_transaction()
            raise
        self.commit_transaction()

    def __len__(self) -> int:
        return sum(1 for _ in self.iter_prefix(b""))
