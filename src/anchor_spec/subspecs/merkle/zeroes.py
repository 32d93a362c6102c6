"""
Empty-subtree hashes.

`zeros[0]` is the value of an empty leaf. `zeros[i + 1]` is the hash of two
empty subtrees of height `i`, so `zeros[levels]` is the root of a tree of
depth `levels` that holds no leaves.
"""

from typing import List, Sequence

from Crypto.Hash import keccak

from anchor_spec.types import Bytes32

from ..bn254.field import to_element
from ..poseidon.hasher import TreeHasher

EMPTY_LEAF_SEED = b"anchor-spec:empty-leaf"
"""Domain string hashed to derive the empty leaf."""


def _derive_zero_leaf() -> Bytes32:
    """keccak256 of the seed, reduced into the scalar field."""
    k = keccak.new(digest_bits=256)
    k.update(EMPTY_LEAF_SEED)
    return to_element(k.digest())


ZERO_LEAF: Bytes32 = _derive_zero_leaf()
"""
The value standing in for an unfilled leaf.

It is a nothing-up-my-sleeve field element, so it cannot collide with the
all-zero sentinel used for unwritten root slots.
"""


class ZeroTable(Sequence[Bytes32]):
    """
    The per-level empty-subtree hashes for one hasher and depth.

    The table is computed once at construction and behaves as a read-only
    sequence of `levels + 1` elements.
    """

    def __init__(self, hasher: TreeHasher, levels: int) -> None:
        if levels < 0:
            raise ValueError(f"levels must be non-negative, got {levels}")
        self.levels = levels

        zeros: List[Bytes32] = [ZERO_LEAF]
        for _ in range(levels):
            zeros.append(hasher.hash_left_right(zeros[-1], zeros[-1]))
        self._zeros = zeros

    def __getitem__(self, level):  # type: ignore[override]
        return self._zeros[level]

    def __len__(self) -> int:
        return len(self._zeros)

    @property
    def empty_root(self) -> Bytes32:
        """Root of a tree with no leaves."""
        return self._zeros[self.levels]
