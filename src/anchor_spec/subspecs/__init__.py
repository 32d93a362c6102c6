"""Subspecifications of the shielded pool."""

from .merkle import MerkleAccumulator, ZeroTable
from .pool import VAnchor
from .transaction import TransactionValidator

__all__ = [
    "MerkleAccumulator",
    "TransactionValidator",
    "VAnchor",
    "ZeroTable",
]
