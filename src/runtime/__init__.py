"""Runtime host: system state, origins, dispatch and configuration."""

from src.runtime.dispatch import BlockReport, Call, DispatchOutcome, Extrinsic, Runtime
from src.runtime.system import System

__all__ = ["BlockReport", "Call", "DispatchOutcome", "Extrinsic", "Runtime", "System"]
