"""Call dispatch and block execution."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from src.core.context import CallContext
from src.core.exceptions import BadOrigin, DispatchError, ExhaustsResources
from src.core.registry import Registry
from src.core.types import BlockNumber, EventRecord, Origin, Weight
from src.pallet.merkle_roots import MerkleRootsPallet
from src.runtime.origin import ensure_signed
from src.runtime.system import System
from src.storage.backend import InMemoryBackend


@dataclass(frozen=True, slots=True)
class Call:
    """A call to a pallet function with its positional arguments."""

    pallet: str
    function: str
    args: tuple[Any, ...] = ()

    @property
    def qualified_name(self) -> str:
        return f"{self.pallet}.{self.function}"


@dataclass(frozen=True, slots=True)
class Extrinsic:
    """A call together with the origin the authentication layer resolved."""

    origin: Origin
    call: Call


@dataclass(frozen=True, slots=True)
class Dispatchable:
    function: Callable[..., None]
    weight: Weight


@dataclass(frozen=True, slots=True)
class DispatchOutcome:
    """Result of dispatching one call."""

    call: Call
    weight: Weight
    error: DispatchError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class BlockReport:
    """Outcomes and events produced while executing one block."""

    number: BlockNumber
    outcomes: list[DispatchOutcome] = field(default_factory=list)
    events: list[EventRecord] = field(default_factory=list)
    weight: Weight = 0

    @property
    def failures(self) -> list[DispatchOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]


class Runtime:
    """Owns storage, system state and pallets; dispatches calls in order."""

    def __init__(
        self,
        *,
        backend: InMemoryBackend | None = None,
        system: System | None = None,
        pallet_prefix: str = "TemplateModule",
        hasher: str = "blake2_128_concat",
        call_weight: Weight = 10_000,
        max_block_weight: Weight | None = None,
    ) -> None:
        self.backend = backend if backend is not None else InMemoryBackend()
        self.system = system if system is not None else System()
        self.max_block_weight = max_block_weight
        self.merkle_roots = MerkleRootsPallet(
            self.backend,
            prefix=pallet_prefix,
            hasher=hasher,
            call_weight=call_weight,
        )
        self.calls: Registry[Dispatchable] = Registry(namespace="call")
        self._register_pallet(self.merkle_roots.name, self.merkle_roots.calls())

    def _register_pallet(
        self,
        pallet_name: str,
        calls: dict[str, tuple[Callable[..., None], Weight]],
    ) -> None:
        for function_name, (function, weight) in calls.items():
            self.calls.register(f"{pallet_name}.{function_name}", Dispatchable(function, int(weight)))

    def weight_of(self, call: Call) -> Weight:
        return self.calls.get(call.qualified_name).weight

    def dispatch(self, origin: Origin, call: Call) -> DispatchOutcome:
        """Authenticate, run the call in a storage transaction and flush its events.

        A ``DispatchError`` rolls back the call's writes and drops its events;
        any other exception also rolls back and then propagates.
        """

        dispatchable = self.calls.get(call.qualified_name)
        try:
            caller = ensure_signed(origin)
        except BadOrigin as exc:
            return DispatchOutcome(call=call, weight=dispatchable.weight, error=exc)

        ctx = CallContext(caller=caller, height=self.system.block_number)
        try:
            with self.backend.transactional():
                dispatchable.function(ctx, *call.args)
        except DispatchError as exc:
            ctx.events.drain()
            return DispatchOutcome(call=call, weight=dispatchable.weight, error=exc)

        for event in ctx.events.drain():
            self.system.deposit_event(event)
        return DispatchOutcome(call=call, weight=dispatchable.weight)

    def execute_block(
        self,
        extrinsics: Sequence[Extrinsic],
        *,
        number: BlockNumber | None = None,
    ) -> BlockReport:
        """Initialize the next block and apply ``extrinsics`` in order.

        Every call is resolved against the call registry first, so a block
        holding an unknown call raises ``RegistryError`` before any of it runs.
        """

        weights = [self.weight_of(extrinsic.call) for extrinsic in extrinsics]
        block_number = self.system.block_number + 1 if number is None else int(number)
        self.system.initialize(block_number)
        report = BlockReport(number=block_number)

        for index, (extrinsic, weight) in enumerate(zip(extrinsics, weights)):
            self.system.note_extrinsic(index)
            if self.max_block_weight is not None and report.weight + weight > self.max_block_weight:
                report.outcomes.append(
                    DispatchOutcome(
                        call=extrinsic.call,
                        weight=0,
                        error=ExhaustsResources(
                            f"Extrinsic {index} needs weight {weight}; "
                            f"{self.max_block_weight - report.weight} left in block {block_number}."
                        ),
                    )
                )
                continue
            outcome = self.dispatch(extrinsic.origin, extrinsic.call)
            report.weight += outcome.weight
            report.outcomes.append(outcome)

        self.system.finalize()
        report.events = self.system.events()
        return report
