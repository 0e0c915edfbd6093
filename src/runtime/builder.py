"""Build a configured runtime from Hydra/OmegaConf config."""

from __future__ import annotations

from dataclasses import dataclass

from omegaconf import DictConfig

from src.core.exceptions import ConfigurationError
from src.runtime.dispatch import Runtime
from src.storage.hashing import HASHERS


@dataclass(slots=True, frozen=True)
class RuntimeConfig:
    """Resolved runtime configuration."""

    pallet_prefix: str = "TemplateModule"
    hasher: str = "blake2_128_concat"
    call_weight: int = 10_000
    max_block_weight: int | None = None
    initial_block: int = 1


def build_runtime_config(cfg: DictConfig) -> RuntimeConfig:
    """Resolve the ``runtime`` group from a top-level config."""

    runtime_cfg = cfg.get("runtime")
    if runtime_cfg is None:
        return RuntimeConfig()

    prefix = str(runtime_cfg.get("pallet_prefix", "TemplateModule")).strip()
    if not prefix:
        raise ConfigurationError("runtime.pallet_prefix must be a non-empty string.")

    hasher = str(runtime_cfg.get("hasher", "blake2_128_concat"))
    if hasher not in HASHERS:
        raise ConfigurationError(
            f"Unsupported runtime.hasher '{hasher}'. Expected one of: {', '.join(sorted(HASHERS))}."
        )

    call_weight = int(runtime_cfg.get("call_weight", 10_000))
    if call_weight < 0:
        raise ConfigurationError("runtime.call_weight must be >= 0.")

    raw_max = runtime_cfg.get("max_block_weight", None)
    max_block_weight = None if raw_max is None else int(raw_max)
    if max_block_weight is not None and max_block_weight < call_weight:
        raise ConfigurationError(
            "runtime.max_block_weight must be null or at least runtime.call_weight, "
            f"got {max_block_weight} < {call_weight}."
        )

    initial_block = int(runtime_cfg.get("initial_block", 1))
    if initial_block < 0:
        raise ConfigurationError("runtime.initial_block must be >= 0.")

    return RuntimeConfig(
        pallet_prefix=prefix,
        hasher=hasher,
        call_weight=call_weight,
        max_block_weight=max_block_weight,
        initial_block=initial_block,
    )


def build_runtime(cfg: DictConfig) -> Runtime:
    """Build a runtime with empty genesis storage positioned at ``initial_block``."""

    runtime_cfg = build_runtime_config(cfg)
    runtime = Runtime(
        pallet_prefix=runtime_cfg.pallet_prefix,
        hasher=runtime_cfg.hasher,
        call_weight=runtime_cfg.call_weight,
        max_block_weight=runtime_cfg.max_block_weight,
    )
    runtime.system.set_block_number(runtime_cfg.initial_block)
    return runtime
