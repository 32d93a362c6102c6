"""Specification for the Poseidon permutation and tree hash."""

from .constants import FULL_ROUNDS, PARTIAL_ROUNDS, generate_parameters
from .hasher import PoseidonHasher, TreeHasher
from .permutation import S_BOX_DEGREE, PoseidonParams, params_for_width, permute

__all__ = [
    "permute",
    "params_for_width",
    "generate_parameters",
    "PoseidonParams",
    "PoseidonHasher",
    "TreeHasher",
    "FULL_ROUNDS",
    "PARTIAL_ROUNDS",
    "S_BOX_DEGREE",
]
