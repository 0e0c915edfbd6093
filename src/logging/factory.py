"""Logger factory for TensorBoard run metrics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from torch.utils.tensorboard import SummaryWriter


@dataclass(slots=True)
class LoggerArtifacts:
    writer: SummaryWriter | None

    def log_scalars(self, metrics: dict[str, float], step: int) -> None:
        if self.writer is None:
            return
        for name, value in sorted(metrics.items()):
            self.writer.add_scalar(f"block/{name}", value, step)

    def close(self) -> None:
        if self.writer is not None:
            self.writer.flush()
            self.writer.close()


def _build_config_summary(
    config_dict: dict[str, Any] | None,
    resolved_config_path: str | None,
) -> str:
    lines: list[str] = []
    if resolved_config_path:
        lines.append(f"resolved_config_path: {resolved_config_path}")
    if config_dict:
        runtime_cfg = config_dict.get("runtime") or {}
        for key in sorted(runtime_cfg):
            lines.append(f"runtime.{key}: {runtime_cfg[key]}")
    return "\n".join(lines)


def build_logger(
    logger_cfg: Any,
    log_path: str,
    config_dict: dict[str, Any] | None = None,
    resolved_config_path: str | None = None,
) -> LoggerArtifacts:
    logger_type = str(logger_cfg.type) if logger_cfg is not None else "none"
    if logger_type == "none":
        return LoggerArtifacts(writer=None)
    if logger_type != "tensorboard":
        raise ValueError(f"Unsupported logger type: {logger_type}")

    writer = SummaryWriter(log_path)
    summary = _build_config_summary(config_dict, resolved_config_path)
    if summary:
        writer.add_text("config/summary", summary)
    return LoggerArtifacts(writer=writer)
