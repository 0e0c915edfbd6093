"""Metrics extraction utilities."""

from __future__ import annotations

import numpy as np

from src.pallet.merkle_roots import Bound, Read
from src.runtime.dispatch import BlockReport


def block_report_to_metrics(report: BlockReport) -> dict[str, float]:
    """Count attempted calls, successful binds and reads, failures and weight for one block."""

    functions = [outcome.call.function for outcome in report.outcomes]
    events = [record.event for record in report.events]
    return {
        "extrinsics": float(len(report.outcomes)),
        "bind_calls": float(sum(1 for f in functions if f == "bind")),
        "lookup_calls": float(sum(1 for f in functions if f == "lookup")),
        "binds": float(sum(1 for e in events if isinstance(e, Bound))),
        "reads": float(sum(1 for e in events if isinstance(e, Read))),
        "failures": float(len(report.failures)),
        "events": float(len(events)),
        "weight": float(report.weight),
    }


def summarize_block_metrics(per_block: list[dict[str, float]]) -> dict[str, float]:
    """Aggregate per-block metrics into run totals and per-block means."""

    if not per_block:
        return {"blocks": 0.0}

    names = sorted(per_block[0])
    table = np.asarray([[row.get(name, 0.0) for name in names] for row in per_block], dtype=np.float64)
    totals = table.sum(axis=0)
    means = table.mean(axis=0)

    summary: dict[str, float] = {"blocks": float(table.shape[0])}
    for idx, name in enumerate(names):
        summary[f"{name}_total"] = float(totals[idx])
        summary[f"{name}_mean"] = float(means[idx])
    return summary
