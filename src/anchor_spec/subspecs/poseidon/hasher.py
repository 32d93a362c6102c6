"""Poseidon as the two-to-one tree hash of the accumulator and edge registry."""

from functools import cached_property
from typing import Protocol, Sequence

from anchor_spec.types import Bytes32, HashError

from ..bn254.field import P_BYTES, reduce_bytes
from .permutation import PoseidonParams, params_for_width, permute


class TreeHasher(Protocol):
    """
    Two-to-one compression used for every internal node of a Merkle tree.

    Implementations must be deterministic and may raise `HashError` on
    malformed input.
    """

    def hash_left_right(self, left: Bytes32, right: Bytes32) -> Bytes32:
        """Hash an ordered pair of 32-byte elements into one element."""
        ...


class PoseidonHasher:
    """
    Poseidon sponge with a single absorption, width `arity + 1`.

    The capacity element is zero. Inputs are read as big-endian integers and
    reduced modulo P. The output is the first state element.
    """

    def __init__(self, arity: int = 2) -> None:
        self.arity = arity

    @cached_property
    def params(self) -> PoseidonParams:
        """The permutation parameters for this arity."""
        try:
            return params_for_width(self.arity + 1)
        except ValueError as e:
            raise HashError(f"No Poseidon parameters for arity {self.arity}") from e

    def hash(self, inputs: Sequence[bytes]) -> Bytes32:
        """
        Hash exactly `arity` elements.

        Raises:
            HashError: If the number of inputs or any input length is wrong.
        """
        if len(inputs) != self.arity:
            raise HashError(f"Poseidon expects {self.arity} inputs, got {len(inputs)}")
        for item in inputs:
            if len(item) != P_BYTES:
                raise HashError(f"Poseidon input must be {P_BYTES} bytes, got {len(item)}")

        state = [0] + [reduce_bytes(item) for item in inputs]
        return Bytes32.from_int(permute(state, self.params)[0])

    def hash_left_right(self, left: Bytes32, right: Bytes32) -> Bytes32:
        """Hash an ordered pair of elements."""
        if self.arity != 2:
            raise HashError(f"hash_left_right needs arity 2, hasher has arity {self.arity}")
        return self.hash([left, right])
