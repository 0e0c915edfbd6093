"""Runtime pallets."""

from src.pallet.merkle_roots import Bound, MerkleRootsPallet, Read

__all__ = ["Bound", "MerkleRootsPallet", "Read"]
