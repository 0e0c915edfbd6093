from __future__ import annotations

import pytest

from src.core.context import CallContext
from src.core.exceptions import BadOrigin, NoValueStored
from src.core.types import Entry, Origin
from src.pallet.merkle_roots import Bound, MerkleRootsPallet, Read
from src.runtime.dispatch import Runtime
from src.storage.backend import InMemoryBackend
from tests.factories.runtime_factory import bind_call, lookup_call

HASH = bytes([0, 1, 2])


def test_bind_emits_bound_event(runtime: Runtime) -> None:
    outcome = runtime.dispatch(Origin.signed(1), bind_call(HASH))

    assert outcome.ok
    assert runtime.system.events()[0].event == Bound(writer=1, key=HASH)


def test_lookup_before_bind_fails_with_no_value_stored(runtime: Runtime) -> None:
    outcome = runtime.dispatch(Origin.signed(2), lookup_call(HASH))

    assert not outcome.ok
    assert isinstance(outcome.error, NoValueStored)
    assert outcome.error == NoValueStored()
    assert outcome.error.module == "merkle_roots"
    assert runtime.system.events() == []


def test_lookup_of_other_accounts_entry_emits_read(runtime: Runtime) -> None:
    assert runtime.dispatch(Origin.signed(2), bind_call(HASH)).ok
    assert runtime.dispatch(Origin.signed(1), lookup_call(HASH)).ok

    assert runtime.system.events()[1].event == Read(reader=1, key=HASH)


@pytest.mark.parametrize(
    ("writer", "reader"),
    [
        pytest.param(7, 7, id="same-account"),
        pytest.param(7, 8, id="other-account"),
    ],
)
def test_bind_stores_writer_and_height(runtime: Runtime, writer: int, reader: int) -> None:
    runtime.system.set_block_number(42)

    assert runtime.dispatch(Origin.signed(writer), bind_call(HASH)).ok
    assert runtime.merkle_roots.merkle_root(HASH) == Entry(writer=writer, height=42)
    assert runtime.dispatch(Origin.signed(reader), lookup_call(HASH)).ok


def test_last_write_wins(runtime: Runtime) -> None:
    runtime.system.set_block_number(3)
    runtime.dispatch(Origin.signed(1), bind_call(HASH))
    runtime.system.set_block_number(9)
    runtime.dispatch(Origin.signed(2), bind_call(HASH))

    assert runtime.merkle_roots.merkle_root(HASH) == Entry(writer=2, height=9)
    assert len(runtime.merkle_roots.merkle_roots) == 1


def test_events_follow_execution_order(runtime: Runtime) -> None:
    other = bytes([9, 9, 9])
    runtime.dispatch(Origin.signed(1), bind_call(HASH))
    runtime.dispatch(Origin.signed(2), lookup_call(other))
    runtime.dispatch(Origin.signed(2), lookup_call(HASH))
    runtime.dispatch(Origin.signed(3), bind_call(other))

    assert [record.event for record in runtime.system.events()] == [
        Bound(writer=1, key=HASH),
        Read(reader=2, key=HASH),
        Bound(writer=3, key=other),
    ]


def test_concrete_scenario(runtime: Runtime) -> None:
    assert runtime.dispatch(Origin.signed(1), bind_call([0, 1, 2])).ok
    assert runtime.dispatch(Origin.signed(2), lookup_call([0, 1, 2])).ok
    failed = runtime.dispatch(Origin.signed(1), lookup_call([9, 9, 9]))

    assert isinstance(failed.error, NoValueStored)
    assert [record.event for record in runtime.system.events()] == [
        Bound(writer=1, key=HASH),
        Read(reader=2, key=HASH),
    ]


def test_repeated_lookups_do_not_mutate_state(runtime: Runtime) -> None:
    runtime.dispatch(Origin.signed(1), bind_call(HASH))
    before = list(runtime.backend.iter_prefix(b""))

    for reader in (1, 2, 3, 2):
        assert runtime.dispatch(Origin.signed(reader), lookup_call(HASH)).ok

    assert list(runtime.backend.iter_prefix(b"")) == before
    readers = [record.event.reader for record in runtime.system.events()[1:]]
    assert readers == [1, 2, 3, 2]


def test_pallet_calls_take_explicit_context() -> None:
    pallet = MerkleRootsPallet(InMemoryBackend())
    ctx = CallContext(caller="alice", height=5)

    pallet.bind(ctx, b"\x00" * 32)

    assert pallet.merkle_root(b"\x00" * 32) == Entry(writer="alice", height=5)
    assert ctx.events.drain() == [Bound(writer="alice", key=b"\x00" * 32)]


def test_pallet_lookup_absent_raises_without_event() -> None:
    pallet = MerkleRootsPallet(InMemoryBackend())
    ctx = CallContext(caller=1, height=1)

    with pytest.raises(NoValueStored, match="0x090909"):
        pallet.lookup(ctx, bytes([9, 9, 9]))
    assert len(ctx.events) == 0


def test_empty_key_is_a_valid_key(runtime: Runtime) -> None:
    assert runtime.dispatch(Origin.signed(1), bind_call(b"")).ok
    assert runtime.dispatch(Origin.signed(1), lookup_call(b"")).ok
    assert runtime.merkle_roots.merkle_root(b"") == Entry(writer=1, height=1)


@pytest.mark.parametrize(
    "writer",
    [
        pytest.param(1, id="int"),
        pytest.param("alice", id="str"),
        pytest.param(bytes(range(32)), id="public-key-bytes"),
        pytest.param((("pk", 1), 7), id="nested-tuple"),
        pytest.param(("ed25519", b"\xff" * 4), id="tuple-with-bytes"),
    ],
)
def test_bind_round_trips_every_supported_identity(runtime: Runtime, writer: object) -> None:
    bound = runtime.dispatch(Origin.signed(writer), bind_call(HASH))
    read = runtime.dispatch(Origin.signed(writer), lookup_call(HASH))

    assert bound.ok and read.ok
    stored = runtime.merkle_roots.merkle_root(HASH)
    assert stored == Entry(writer=writer, height=1)
    assert hash(stored) == hash(Entry(writer=writer, height=1))
    assert [record.event for record in runtime.system.events()] == [
        Bound(writer=writer, key=HASH),
        Read(reader=writer, key=HASH),
    ]


@pytest.mark.parametrize(
    "account",
    [
        pytest.param(True, id="bool"),
        pytest.param([1, 2], id="list"),
        pytest.param((), id="empty-tuple"),
        pytest.param(1.5, id="float"),
    ],
)
def test_unsupported_identity_is_rejected_before_bind(runtime: Runtime, account: object) -> None:
    outcome = runtime.dispatch(Origin.signed(account), bind_call(HASH))

    assert isinstance(outcome.error, BadOrigin)
    assert runtime.merkle_roots.merkle_root(HASH) is None
    assert runtime.system.events() == []
