"""Full-tree Merkleization, the reference the incremental accumulator must agree with."""

from __future__ import annotations

from typing import List, Sequence

from anchor_spec.types import Bytes32

from ..poseidon.hasher import TreeHasher
from .zeroes import ZeroTable


def merkleize(leaves: Sequence[Bytes32], levels: int, hasher: TreeHasher) -> Bytes32:
    """
    Compute the root of a depth-`levels` tree holding `leaves` on the left.

    Behavior
    --------
    - Missing leaves are `ZERO_LEAF`; missing subtrees at level `i` are `zeros[i]`.
    - Only the populated prefix of each level is hashed, so the cost is
      proportional to `len(leaves) * levels` rather than `2**levels`.
    - No leaves: returns the empty-tree root.

    Raises:
        ValueError: If more than `2**levels` leaves are given.
    """
    if len(leaves) > 2**levels:
        raise ValueError("merkleize: input exceeds tree capacity")

    zeros = ZeroTable(hasher, levels)
    level: List[Bytes32] = list(leaves)

    for height in range(levels):
        if not level:
            return zeros.empty_root

        # Pad odd-length layers with the empty subtree of this height.
        if len(level) % 2 == 1:
            level.append(zeros[height])

        level = [hasher.hash_left_right(level[i], level[i + 1]) for i in range(0, len(level), 2)]

    return level[0] if level else zeros.empty_root
