"""
Incremental Merkle accumulator with a bounded root history.

Leaves are appended left to right. Only the rightmost "frontier" of the
tree is kept: for each level, the most recent left child still waiting for
its right sibling (`filled_subtrees`). Inserting a leaf costs one hash per
level, and the root after every insert is recorded in a ring of
`ROOT_HISTORY_SIZE` slots so that proofs built against a slightly stale
root remain acceptable.
"""

from __future__ import annotations

import logging
from typing import Final, List, Sequence

from anchor_spec.types import ZERO_HASH, Bytes32, TreeFull

from ..poseidon.hasher import TreeHasher
from .zeroes import ZeroTable

logger = logging.getLogger(__name__)

ROOT_HISTORY_SIZE: Final = 100
"""Number of recent roots that remain valid spend targets."""

MAX_LEVELS: Final = 32
"""Deepest supported tree (leaf indices are 32-bit)."""


class MerkleAccumulator:
    """
    Append-only Merkle tree over 32-byte field elements.

    Attributes:
        levels: Depth of the tree. Capacity is `2**levels` leaves.
        next_index: Index the next inserted leaf will receive.
        current_root_index: Ring slot holding the newest root.
        filled_subtrees: Cached left sibling per level.
        roots: Circular root history. Unwritten slots hold the zero sentinel.
    """

    def __init__(self, levels: int, hasher: TreeHasher) -> None:
        if not 1 <= levels <= MAX_LEVELS:
            raise ValueError(f"levels must be in [1, {MAX_LEVELS}], got {levels}")

        self.levels = levels
        self.hasher = hasher
        self.zeros = ZeroTable(hasher, levels)

        self.next_index = 0
        self.current_root_index = 0
        self.filled_subtrees: List[Bytes32] = [self.zeros[i] for i in range(levels)]
        self.roots: List[Bytes32] = [ZERO_HASH] * ROOT_HISTORY_SIZE

    @property
    def capacity(self) -> int:
        """Total number of leaves the tree can hold."""
        return 2**self.levels

    def has_capacity(self, count: int = 1) -> bool:
        """Whether `count` more leaves fit."""
        return self.next_index + count <= self.capacity

    def _walk(self, index: int, leaf: Bytes32, filled: List[Bytes32]) -> Bytes32:
        """
        Hash a leaf at `index` up to the root.

        Updates `filled` in place with the new left siblings.
        """
        current = leaf
        for level in range(self.levels):
            if index % 2 == 0:
                filled[level] = current
                left, right = current, self.zeros[level]
            else:
                left, right = filled[level], current
            current = self.hasher.hash_left_right(left, right)
            index //= 2
        return current

    def insert(self, leaf: Bytes32) -> int:
        """
        Append a leaf and record the new root.

        The walk runs on a copy of the frontier. If the hasher raises, the
        accumulator is left exactly as it was.

        Returns:
            The index assigned to the leaf.

        Raises:
            TreeFull: If the tree already holds `2**levels` leaves.
            HashError: If the hasher rejects an input.
        """
        return self.insert_many([leaf])[0]

    def insert_many(self, leaves: Sequence[Bytes32]) -> List[int]:
        """
        Append several leaves as one all-or-nothing batch.

        Every intermediate root is pushed into the history, exactly as if the
        leaves had been inserted one by one.

        Raises:
            TreeFull: If the batch does not fit. Checked before any hashing.
            HashError: If the hasher rejects an input. Nothing is written.
        """
        if not self.has_capacity(len(leaves)):
            raise TreeFull(self.levels, self.next_index, len(leaves))

        filled = list(self.filled_subtrees)
        new_roots: List[Bytes32] = []
        for offset, leaf in enumerate(leaves):
            new_roots.append(self._walk(self.next_index + offset, Bytes32(leaf), filled))

        first = self.next_index
        self.filled_subtrees = filled
        for root in new_roots:
            self.current_root_index = (self.current_root_index + 1) % ROOT_HISTORY_SIZE
            self.roots[self.current_root_index] = root
        self.next_index += len(leaves)

        indices = list(range(first, self.next_index))
        logger.debug(
            "Inserted %d leaf(s) at %s, root %s",
            len(leaves),
            indices,
            self.get_last_root().hex(),
        )
        return indices

    def is_known_root(self, root: Bytes32) -> bool:
        """
        Whether `root` is one of the last `ROOT_HISTORY_SIZE` roots.

        The zero sentinel is never known.
        """
        if root == ZERO_HASH:
            return False

        i = self.current_root_index
        for _ in range(ROOT_HISTORY_SIZE):
            if self.roots[i] == root:
                return True
            i = (i - 1) % ROOT_HISTORY_SIZE
        return False

    def get_last_root(self) -> Bytes32:
        """The newest root, or the empty-tree root before any insert."""
        if self.next_index == 0:
            return self.zeros.empty_root
        return self.roots[self.current_root_index]
