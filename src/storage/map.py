"""Typed storage map over the byte-keyed backend."""

from __future__ import annotations

from collections.abc import Iterator

from src.core.exceptions import StorageError
from src.core.types import Entry
from src.storage.backend import InMemoryBackend
from src.storage.codec import decode_entry, encode_entry
from src.storage.hashing import CONCAT_PREFIX_LEN, blake2_128, get_hasher


class StorageMap:
    """Map from raw byte keys to entries, namespaced under ``prefix``/``name``."""

    def __init__(
        self,
        backend: InMemoryBackend,
        *,
        prefix: str,
        name: str,
        hasher: str = "blake2_128_concat",
    ) -> None:
        self._backend = backend
        self.prefix = prefix
        self.name = name
        self.hasher_name = hasher
        self._hasher = get_hasher(hasher)
        self._namespace = blake2_128(prefix.encode("utf-8")) + blake2_128(name.encode("utf-8"))

    def storage_key(self, key: bytes) -> bytes:
        return self._namespace + self._hasher(bytes(key))

    def insert(self, key: bytes, entry: Entry) -> None:
        self._backend.set(self.storage_key(key), encode_entry(entry))

    def get(self, key: bytes) -> Entry | None:
        raw = self._backend.get(self.storage_key(key))
        if raw is None:
            return None
        return decode_entry(raw)

    def contains_key(self, key: bytes) -> bool:
        return self._backend.contains(self.storage_key(key))

    def iter_items(self) -> Iterator[tuple[bytes, Entry]]:
        """Yield ``(raw_key, entry)`` pairs; requires a key-preserving hasher."""

        skip = CONCAT_PREFIX_LEN.get(self.hasher_name)
        if skip is None:
            raise StorageError(
                f"Storage map {self.prefix}.{self.name} uses non-reversible hasher "
                f"'{self.hasher_name}' and cannot be iterated."
            )
        offset = len(self._namespace) + skip
        for storage_key, raw in self._backend.iter_prefix(self._namespace):
            yield storage_key[offset:], decode_entry(raw)

    def __len__(self) -> int:
        return sum(1 for _ in self._backend.iter_prefix(self._namespace))
