"""Deterministic value encoding for persisted entries.

Identities are written as JSON with ints and strings stored verbatim,
``bytes`` tagged as ``{"b": "<hex>"}`` and tuples tagged as ``{"t": [...]}``,
so every identity accepted by ``ensure_signed`` decodes to an equal value.
"""

from __future__ import annotations

import json
from typing import Any

from src.core.exceptions import StorageError
from src.core.types import AccountId, Entry


def _encode_identity(value: AccountId) -> Any:
    if isinstance(value, bool):
        raise StorageError(f"Writer identity {value!r} is not encodable.")
    if isinstance(value, (int, str)):
        return value
    if isinstance(value, bytes):
        return {"b": value.hex()}
    if isinstance(value, tuple):
        return {"t": [_encode_identity(item) for item in value]}
    raise StorageError(f"Writer identity {value!r} is not encodable.")


def _decode_identity(value: Any) -> AccountId:
    if isinstance(value, bool):
        raise StorageError(f"Malformed stored identity: {value!r}")
    if isinstance(value, (int, str)):
        return value
    if isinstance(value, dict) and len(value) == 1:
        if isinstance(value.get("b"), str):
            try:
                return bytes.fromhex(value["b"])
            except ValueError as exc:
                raise StorageError(f"Malformed stored identity: {value!r}") from exc
        if isinstance(value.get("t"), list):
            return tuple(_decode_identity(item) for item in value["t"])
    raise StorageError(f"Malformed stored identity: {value!r}")


def encode_entry(entry: Entry) -> bytes:
    payload = {"writer": _encode_identity(entry.writer), "height": int(entry.height)}
    text = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=True)
    return text.encode("ascii")


def decode_entry(raw: bytes) -> Entry:
    try:
        payload = json.loads(raw.decode("ascii"))
        writer = payload["writer"]
        height = payload["height"]
    except (UnicodeDecodeError, ValueError, KeyError, TypeError) as exc:
        raise StorageError(f"Malformed stored entry: {raw!r}") from exc
    if not isinstance(height, int) or isinstance(height, bool):
        raise StorageError(f"Malformed stored entry height: {height!r}")
    return Entry(writer=_decode_identity(writer), height=height)
