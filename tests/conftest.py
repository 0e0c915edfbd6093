from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from src.runtime.dispatch import Runtime
from tests.factories.runtime_factory import build_test_runtime


@pytest.fixture
def runtime() -> Runtime:
    """Fresh runtime with empty genesis storage, positioned at block 1."""

    return build_test_runtime(block_number=1)


@pytest.fixture
def write_script(tmp_path: Path) -> Callable[..., Path]:
    def _write(blocks: list[Any], name: str = "transactions.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps({"blocks": blocks}), encoding="utf-8")
        return path

    return _write
