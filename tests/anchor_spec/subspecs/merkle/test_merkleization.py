"""Tests for reference Merkleization."""

import pytest

from anchor_spec.subspecs.merkle import ZeroTable, merkleize
from anchor_spec.subspecs.poseidon import PoseidonHasher
from tests.anchor_spec.helpers import make_bytes32


def test_empty(hasher: PoseidonHasher) -> None:
    assert merkleize([], 3, hasher) == ZeroTable(hasher, 3).empty_root


def test_single_leaf(hasher: PoseidonHasher) -> None:
    zeros = ZeroTable(hasher, 2)
    leaf = make_bytes32(1)
    expected = hasher.hash_left_right(hasher.hash_left_right(leaf, zeros[0]), zeros[1])
    assert merkleize([leaf], 2, hasher) == expected


def test_full_tree(hasher: PoseidonHasher) -> None:
    leaves = [make_bytes32(i) for i in range(4)]
    left = hasher.hash_left_right(leaves[0], leaves[1])
    right = hasher.hash_left_right(leaves[2], leaves[3])
    assert merkleize(leaves, 2, hasher) == hasher.hash_left_right(left, right)


def test_odd_layer_padded(hasher: PoseidonHasher) -> None:
    zeros = ZeroTable(hasher, 2)
    leaves = [make_bytes32(i) for i in range(3)]
    left = hasher.hash_left_right(leaves[0], leaves[1])
    right = hasher.hash_left_right(leaves[2], zeros[0])
    assert merkleize(leaves, 2, hasher) == hasher.hash_left_right(left, right)


def test_zero_levels(hasher: PoseidonHasher) -> None:
    leaf = make_bytes32(1)
    assert merkleize([leaf], 0, hasher) == leaf


def test_over_capacity(hasher: PoseidonHasher) -> None:
    with pytest.raises(ValueError, match="exceeds tree capacity"):
        merkleize([make_bytes32(i) for i in range(5)], 2, hasher)
