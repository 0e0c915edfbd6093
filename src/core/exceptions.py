"""Custom exception types used across the project."""

from __future__ import annotations


class MerkleRegistryError(Exception):
    """Base exception for the project."""


class RegistryError(MerkleRegistryError):
    """Raised when a call registry lookup or registration fails."""


class ConfigurationError(MerkleRegistryError):
    """Raised when runtime configuration is invalid or incomplete."""


class StorageError(MerkleRegistryError):
    """Raised when persisted state is malformed or a transaction is misused."""


class DispatchError(MerkleRegistryError):
    """Raised by a dispatched call to abort it and discard its effects."""

    module: str = "system"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.name)

    @property
    def name(self) -> str:
        return type(self).__name__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DispatchError):
            return NotImplemented
        return (self.module, self.name) == (other.module, other.name)

    def __hash__(self) -> int:
        return hash((self.module, self.name))


class BadOrigin(DispatchError):
    """Raised when a call requires a signed origin and did not get one."""


class ExhaustsResources(DispatchError):
    """Raised when an extrinsic would exceed the block weight limit."""


class NoValueStored(DispatchError):
    """Raised when no entry exists for the requested merkle root."""

    module = "merkle_roots"


class DataValidationError(MerkleRegistryError):
    """Raised when a transaction script fails validation."""
