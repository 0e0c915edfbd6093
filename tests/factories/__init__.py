"""Shared test factories."""

from .config_factory import (
    CONCRETE_SCENARIO_BLOCKS,
    DEFAULT_RUNTIME_CFG,
    build_replay_cfg,
    build_runtime_cfg,
)
from .runtime_factory import bind_call, build_test_runtime, lookup_call, signed

__all__ = [
    "CONCRETE_SCENARIO_BLOCKS",
    "DEFAULT_RUNTIME_CFG",
    "build_replay_cfg",
    "build_runtime_cfg",
    "bind_call",
    "build_test_runtime",
    "lookup_call",
    "signed",
]
