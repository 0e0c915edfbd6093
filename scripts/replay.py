"""CLI for replaying a transaction script against the merkle root registry."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import hydra
from omegaconf import DictConfig

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.runners.replay import run_replay  # noqa: E402
from src.utils.env import load_env_file  # noqa: E402
from src.utils.hydra import apply_env_overrides, as_yaml  # noqa: E402

load_env_file()


@hydra.main(version_base=None, config_path="../configs", config_name="config")
def main(cfg: DictConfig) -> None:
    cfg = apply_env_overrides(cfg)
    print(as_yaml(cfg))
    result = run_replay(cfg)
    print(json.dumps(result, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
