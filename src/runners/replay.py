"""Replay a transaction script against a fresh runtime."""

from __future__ import annotations

import datetime
import os
from dataclasses import asdict, is_dataclass
from typing import Any

from omegaconf import DictConfig

from src.core.types import EventRecord
from src.logging.factory import build_logger
from src.logging.metrics import block_report_to_metrics, summarize_block_metrics
from src.runners.script import load_transaction_script
from src.runtime.builder import build_runtime
from src.runtime.dispatch import BlockReport, Runtime
from src.storage.hashing import is_reversible
from src.utils.hydra import as_yaml, resolve_config
from src.utils.io import ensure_dir, save_json, save_text
from src.utils.perf import PerfTracker


def _to_builtin(value: Any) -> Any:
    if isinstance(value, bytes):
        return "0x" + value.hex()
    if isinstance(value, dict):
        return {k: _to_builtin(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_builtin(v) for v in value]
    return value


def event_record_to_dict(record: EventRecord) -> dict[str, Any]:
    event = record.event
    fields = asdict(event) if is_dataclass(event) else {"value": event}
    return {
        "block": record.block_number,
        "phase": record.phase.kind,
        "extrinsic_index": record.phase.index,
        "event": type(event).__name__,
        "fields": _to_builtin(fields),
    }


def _failures_to_dicts(report: BlockReport) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    for index, outcome in enumerate(report.outcomes):
        if outcome.ok:
            continue
        rows.append(
            {
                "block": report.number,
                "extrinsic_index": index,
                "call": outcome.call.qualified_name,
                "error": outcome.error.name if outcome.error is not None else None,
                "message": str(outcome.error),
            }
        )
    return rows


def export_state(runtime: Runtime) -> dict[str, Any] | None:
    """Dump merkle root entries, or ``None`` when keys are not recoverable."""

    storage_map = runtime.merkle_roots.merkle_roots
    if not is_reversible(storage_map.hasher_name):
        return None
    return {
        "0x" + key.hex(): {"writer": _to_builtin(entry.writer), "height": entry.height}
        for key, entry in storage_map.iter_items()
    }


def run_replay(cfg: DictConfig) -> dict[str, Any]:
    """Execute every block of ``cfg.script.path`` and return summary metrics."""

    timestamp = datetime.datetime.now().strftime("%y%m%d-%H%M%S")
    run_name = os.path.join(str(cfg.get("run_name", "replay")), timestamp)
    log_path = os.path.join(str(cfg.paths.logdir), run_name)
    ensure_dir(log_path)

    resolved_config_path = os.path.join(log_path, "resolved_config.yaml")
    save_text(resolved_config_path, as_yaml(cfg))

    blocks = load_transaction_script(str(cfg.script.path))
    runtime = build_runtime(cfg)
    start_block = runtime.system.block_number
    perf_cfg = cfg.get("perf")
    perf = PerfTracker(enabled=bool(perf_cfg.get("enabled", False)) if perf_cfg is not None else False)

    per_block: list[dict[str, float]] = []
    events: list[dict[str, Any]] = []
    failures: list[dict[str, Any]] = []
    logger_artifacts = build_logger(
        cfg.get("logger"),
        log_path,
        config_dict=resolve_config(cfg),
        resolved_config_path=resolved_config_path,
    )
    try:
        for offset, extrinsics in enumerate(blocks):
            with perf.time("block"):
                report = runtime.execute_block(extrinsics, number=start_block + offset)
            metrics = block_report_to_metrics(report)
            logger_artifacts.log_scalars(metrics, step=report.number)
            per_block.append(metrics)
            events.extend(event_record_to_dict(record) for record in report.events)
            failures.extend(_failures_to_dicts(report))
    finally:
        logger_artifacts.close()

    events_path = os.path.join(log_path, "events.json")
    save_json(events_path, events)
    state = export_state(runtime)
    state_path: str | None = None
    if state is not None:
        state_path = os.path.join(log_path, "state.json")
        save_json(state_path, state)

    summary: dict[str, Any] = {
        "log_path": log_path,
        "events_path": events_path,
        "state_path": state_path,
        "final_block": runtime.system.block_number,
        "metrics": summarize_block_metrics(per_block),
        "failures": failures,
    }
    if perf.enabled:
        summary["perf"] = perf.as_dict()

    summary_path = os.path.join(log_path, str(cfg.paths.get("summary_filename", "summary.json")))
    save_json(summary_path, summary)
    summary["summary_path"] = summary_path
    return summary
