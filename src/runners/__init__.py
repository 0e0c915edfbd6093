"""Script-driven runners."""

from src.runners.replay import run_replay

__all__ = ["run_replay"]
