"""Merkle root registry pallet.

Binds an opaque key, normally the merkle root of a file stored off-ledger,
to the account that wrote it and the block it was written in. Any signed
account may bind any key, overwriting earlier bindings, and any signed
account may confirm that a key is bound.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from src.core.context import CallContext
from src.core.exceptions import NoValueStored
from src.core.types import AccountId, Entry, Weight
from src.storage.backend import InMemoryBackend
from src.storage.map import StorageMap

PALLET_NAME = "merkle_roots"
STORAGE_ITEM = "MerkleRoots"
DEFAULT_PREFIX = "TemplateModule"
DEFAULT_CALL_WEIGHT: Weight = 10_000


@dataclass(frozen=True, slots=True)
class Bound:
    """A merkle root was stored by ``writer``."""

    writer: AccountId
    key: bytes


@dataclass(frozen=True, slots=True)
class Read:
    """An entry for ``key`` was found on behalf of ``reader``."""

    reader: AccountId
    key: bytes


class MerkleRootsPallet:
    """Registry of merkle roots keyed by raw bytes."""

    name = PALLET_NAME

    def __init__(
        self,
        backend: InMemoryBackend,
        *,
        prefix: str = DEFAULT_PREFIX,
        hasher: str = "blake2_128_concat",
        call_weight: Weight = DEFAULT_CALL_WEIGHT,
    ) -> None:
        self.merkle_roots = StorageMap(backend, prefix=prefix, name=STORAGE_ITEM, hasher=hasher)
        self.call_weight = int(call_weight)

    def calls(self) -> dict[str, tuple[Callable[[CallContext, bytes], None], Weight]]:
        """Dispatchable calls with their fixed weights."""

        return {
            "bind": (self.bind, self.call_weight),
            "lookup": (self.lookup, self.call_weight),
        }

    def bind(self, ctx: CallContext, key: bytes) -> None:
        """Store the caller and current height at ``key``, replacing any entry."""

        key = bytes(key)
        self.merkle_roots.insert(key, Entry(writer=ctx.caller, height=ctx.height))
        ctx.deposit_event(Bound(writer=ctx.caller, key=key))

    def lookup(self, ctx: CallContext, key: bytes) -> None:
        """Confirm that ``key`` has an entry; any account may read any entry."""

        key = bytes(key)
        if not self.merkle_roots.contains_key(key):
            raise NoValueStored(f"No merkle root entry stored for key 0x{key.hex()}.")
        # The entry is fetched but not exposed; only its existence is reported.
        _entry = self.merkle_roots.get(key)
        ctx.deposit_event(Read(reader=ctx.caller, key=key))

    def merkle_root(self, key: bytes) -> Entry | None:
        return self.merkle_roots.get(bytes(key))
