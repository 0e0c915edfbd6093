"""Transaction script loading and validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from src.core.exceptions import DataValidationError
from src.core.types import Origin
from src.runtime.dispatch import Call, Extrinsic
from src.utils.io import load_json

SUPPORTED_CALLS: tuple[str, ...] = ("bind", "lookup")


def parse_key(raw: Any) -> bytes:
    """Parse a hex string (optionally ``0x``-prefixed) or a list of byte values."""

    if isinstance(raw, list):
        try:
            return bytes(int(v) for v in raw)
        except (TypeError, ValueError) as exc:
            raise DataValidationError(f"Invalid byte list key: {raw!r}") from exc
    if not isinstance(raw, str):
        raise DataValidationError(f"Key must be a hex string or byte list, got {type(raw).__name__}.")
    text = raw[2:] if raw.lower().startswith("0x") else raw
    try:
        return bytes.fromhex(text)
    except ValueError as exc:
        raise DataValidationError(f"Invalid hex key: {raw!r}") from exc


def parse_origin(raw: Any) -> Origin:
    if raw is None:
        return Origin.none()
    if raw == "root":
        return Origin.root()
    if isinstance(raw, bool) or not isinstance(raw, (int, str)):
        raise DataValidationError(f"Unsupported signer: {raw!r}")
    return Origin.signed(raw)


def parse_extrinsic(raw: Any, *, pallet: str = "merkle_roots") -> Extrinsic:
    if not isinstance(raw, dict):
        raise DataValidationError(f"Extrinsic must be an object, got {type(raw).__name__}.")
    function = str(raw.get("call", ""))
    if function not in SUPPORTED_CALLS:
        raise DataValidationError(
            f"Unsupported call '{function}'. Expected one of: {', '.join(SUPPORTED_CALLS)}."
        )
    if "key" not in raw:
        raise DataValidationError(f"Extrinsic '{function}' is missing 'key'.")
    return Extrinsic(
        origin=parse_origin(raw.get("signer")),
        call=Call(pallet=pallet, function=function, args=(parse_key(raw["key"]),)),
    )


def parse_script(payload: Any) -> list[list[Extrinsic]]:
    """Parse ``{"blocks": [[...], ...]}`` or a bare list of blocks."""

    blocks = payload.get("blocks") if isinstance(payload, dict) else payload
    if not isinstance(blocks, list):
        raise DataValidationError("Transaction script must contain a list of blocks.")

    parsed: list[list[Extrinsic]] = []
    for block_idx, block in enumerate(blocks):
        if isinstance(block, dict):
            block = block.get("extrinsics", [])
        if not isinstance(block, list):
            raise DataValidationError(f"Block {block_idx} must be a list of extrinsics.")
        parsed.append([parse_extrinsic(item) for item in block])
    return parsed


def load_transaction_script(path: str | Path) -> list[list[Extrinsic]]:
    target = Path(path)
    if not target.exists():
        raise DataValidationError(f"Transaction script not found: {target}")
    return parse_script(load_json(target))
