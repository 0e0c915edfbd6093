"""Hydra/OmegaConf utility helpers."""

from __future__ import annotations

from typing import Any

from omegaconf import DictConfig, OmegaConf

from src.utils.env import env_overrides


def resolve_config(cfg: DictConfig) -> dict[str, Any]:
    return OmegaConf.to_container(cfg, resolve=True)  # type: ignore[return-value]


def as_yaml(cfg: DictConfig) -> str:
    return OmegaConf.to_yaml(cfg, resolve=True)


def apply_env_overrides(cfg: DictConfig) -> DictConfig:
    """Merge ``MERKLE_REGISTRY_*`` environment overrides on top of ``cfg``."""

    overrides = env_overrides()
    if not overrides:
        return cfg
    return OmegaConf.merge(cfg, OmegaConf.from_dotlist(overrides))  # type: ignore[return-value]
