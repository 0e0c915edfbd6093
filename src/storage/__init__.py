"""Key-value storage layer: backend, hashers, codec and typed maps."""

from src.storage.backend import InMemoryBackend
from src.storage.map import StorageMap

__all__ = ["InMemoryBackend", "StorageMap"]
