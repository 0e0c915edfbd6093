"""Environment variable loading helpers."""

from __future__ import annotations

import os
from collections.abc import Mapping

from dotenv import load_dotenv

ENV_PREFIX = "MERKLE_REGISTRY_"


def load_env_file(path: str | None = None) -> None:
    """Load a local .env without overriding existing process variables."""

    load_dotenv(dotenv_path=path, override=False)


def env_overrides(environ: Mapping[str, str] | None = None) -> list[str]:
    """Turn ``MERKLE_REGISTRY_RUNTIME__CALL_WEIGHT=5`` into ``runtime.call_weight=5``."""

    source = os.environ if environ is None else environ
    overrides: list[str] = []
    for name in sorted(source):
        if not name.startswith(ENV_PREFIX):
            continue
        dotted = name[len(ENV_PREFIX):].lower().replace("__", ".")
        if dotted:
            overrides.append(f"{dotted}={source[name]}")
    return overrides
