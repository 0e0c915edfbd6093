from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from src.runners.replay import run_replay
from tests.factories.config_factory import CONCRETE_SCENARIO_BLOCKS, build_replay_cfg


@pytest.mark.integration
def test_replay_concrete_scenario(tmp_path: Path, write_script: Callable[..., Path]) -> None:
    cfg = build_replay_cfg(tmp_path, write_script(CONCRETE_SCENARIO_BLOCKS), perf=True)

    result = run_replay(cfg)

    assert result["final_block"] == 1
    assert result["metrics"]["binds_total"] == 1.0
    assert result["metrics"]["reads_total"] == 1.0
    assert result["metrics"]["failures_total"] == 1.0
    assert [row["error"] for row in result["failures"]] == ["NoValueStored"]
    assert "block_total_s" in result["perf"]

    events = json.loads(Path(result["events_path"]).read_text(encoding="utf-8"))
    assert [(e["event"], e["fields"]) for e in events] == [
        ("Bound", {"writer": 1, "key": "0x000102"}),
        ("Read", {"reader": 2, "key": "0x000102"}),
    ]
    state = json.loads(Path(result["state_path"]).read_text(encoding="utf-8"))
    assert state == {"0x000102": {"writer": 1, "height": 1}}
    assert Path(result["summary_path"]).exists()
    assert (Path(result["log_path"]) / "resolved_config.yaml").exists()


@pytest.mark.integration
def test_replay_overwrites_across_blocks_and_skips_state_for_opaque_hasher(
    tmp_path: Path,
    write_script: Callable[..., Path],
) -> None:
    blocks = [
        [{"signer": 1, "call": "bind", "key": "0xaa"}],
        [{"signer": 2, "call": "bind", "key": "0xaa"}, {"signer": None, "call": "lookup", "key": "0xaa"}],
    ]
    cfg = build_replay_cfg(tmp_path, write_script(blocks), runtime={"hasher": "blake2_256", "initial_block": 5})

    result = run_replay(cfg)

    assert result["final_block"] == 6
    assert result["state_path"] is None
    assert result["failures"][0]["error"] == "BadOrigin"
    assert result["metrics"]["blocks"] == 2.0


@pytest.mark.integration
def test_replay_writes_tensorboard_logs(tmp_path: Path, write_script: Callable[..., Path]) -> None:
    cfg = build_replay_cfg(tmp_path, write_script(CONCRETE_SCENARIO_BLOCKS), logger_type="tensorboard")

    result = run_replay(cfg)

    assert list(Path(result["log_path"]).glob("events.out.tfevents.*"))


def test_replay_rejects_unknown_logger(tmp_path: Path, write_script: Callable[..., Path]) -> None:
    cfg = build_replay_cfg(tmp_path, write_script(CONCRETE_SCENARIO_BLOCKS), logger_type="wandb")

    with pytest.raises(ValueError, match="Unsupported logger type"):
        run_replay(cfg)
