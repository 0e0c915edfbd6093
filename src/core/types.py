"""Shared type definitions and lightweight data containers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

# Signed identities: ints, strings, raw bytes (public keys) or tuples of these.
AccountId = int | str | bytes | tuple
BlockNumber = int
Weight = int

OriginKind = Literal["signed", "root", "none"]
PhaseKind = Literal["initialization", "apply_extrinsic", "finalization"]


@dataclass(frozen=True, slots=True)
class Entry:
    """Writer identity and block height recorded for a merkle root."""

    writer: AccountId
    height: BlockNumber


@dataclass(frozen=True, slots=True)
class Origin:
    """Origin of a dispatched call as resolved by the authentication layer."""

    kind: OriginKind
    account: AccountId | None = None

    @classmethod
    def signed(cls, account: AccountId) -> "Origin":
        return cls(kind="signed", account=account)

    @classmethod
    def root(cls) -> "Origin":
        return cls(kind="root")

    @classmethod
    def none(cls) -> "Origin":
        return cls(kind="none")


@dataclass(frozen=True, slots=True)
class Phase:
    """Block execution phase an event was deposited in."""

    kind: PhaseKind
    index: int | None = None

    @classmethod
    def initialization(cls) -> "Phase":
        return cls(kind="initialization")

    @classmethod
    def apply_extrinsic(cls, index: int) -> "Phase":
        return cls(kind="apply_extrinsic", index=int(index))

    @classmethod
    def finalization(cls) -> "Phase":
        return cls(kind="finalization")


@dataclass(frozen=True, slots=True)
class EventRecord:
    """An event together with the phase and block it was deposited in."""

    phase: Phase
    event: Any
    block_number: BlockNumber


def is_account_id(value: Any) -> bool:
    """Whether ``value`` is an identity the runtime can authenticate and persist."""

    if isinstance(value, bool):
        return False
    if isinstance(value, (int, str, bytes)):
        return True
    if isinstance(value, tuple):
        return len(value) > 0 and all(is_account_id(item) for item in value)
    return False
