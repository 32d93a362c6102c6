"""Incremental Merkle accumulator, empty-subtree table and reference Merkleization."""

from .accumulator import MAX_LEVELS, ROOT_HISTORY_SIZE, MerkleAccumulator
from .merkleization import merkleize
from .zeroes import EMPTY_LEAF_SEED, ZERO_LEAF, ZeroTable

__all__ = [
    "MerkleAccumulator",
    "ROOT_HISTORY_SIZE",
    "MAX_LEVELS",
    "ZeroTable",
    "ZERO_LEAF",
    "EMPTY_LEAF_SEED",
    "merkleize",
]
