"""Storage key hashers."""

from __future__ import annotations

import hashlib
from collections.abc import Callable

from src.core.exceptions import ConfigurationError

Hasher = Callable[[bytes], bytes]


def blake2_128(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=16).digest()


def blake2_256(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=32).digest()


def blake2_128_concat(data: bytes) -> bytes:
    """Hash prefix followed by the raw key, so keys can be recovered."""

    return blake2_128(data) + bytes(data)


def identity(data: bytes) -> bytes:
    return bytes(data)


HASHERS: dict[str, Hasher] = {
    "blake2_128": blake2_128,
    "blake2_128_concat": blake2_128_concat,
    "blake2_256": blake2_256,
    "identity": identity,
}

# Number of hash bytes preceding the raw key for hashers that keep it.
CONCAT_PREFIX_LEN: dict[str, int] = {
    "blake2_128_concat": 16,
    "identity": 0,
}


def get_hasher(name: str) -> Hasher:
    try:
        return HASHERS[name]
    except KeyError as exc:
        available = ", ".join(sorted(HASHERS))
        raise ConfigurationError(
            f"Unsupported storage hasher '{name}'. Available: {available}."
        ) from exc


def is_reversible(name: str) -> bool:
    return name in CONCAT_PREFIX_LEN
