"""
A minimal Python specification for the Poseidon permutation over BN254.

The design is based on the paper "Poseidon: A New Hash Function for
Zero-Knowledge Proof Systems" (https://eprint.iacr.org/2019/458).

The state is a list of integers in `[0, P)`. Working on plain integers
rather than field-element models keeps a 30-level tree walk fast enough for tests.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..bn254.field import P
from .constants import FULL_ROUNDS, PARTIAL_ROUNDS, generate_parameters

# =================================================================
# Poseidon Parameter Definitions
# =================================================================

S_BOX_DEGREE = 5
"""
The S-box exponent `alpha`.

For BN254, `gcd(5, P-1) = 1`, so `x -> x^5` is a permutation and the
smallest such exponent.
"""


class PoseidonParams(BaseModel):
    """Parameters for a specific Poseidon instance."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(gt=1, description="The size of the state (t).")
    rounds_f: int = Field(gt=0, description="Total number of 'full' rounds.")
    rounds_p: int = Field(ge=0, description="Total number of 'partial' rounds.")
    round_constants: List[int] = Field(
        min_length=1,
        description="One constant per state element per round.",
    )
    mds: List[List[int]] = Field(
        min_length=1,
        description="The width x width maximum distance separable matrix.",
    )

    @model_validator(mode="after")
    def check_lengths(self) -> "PoseidonParams":
        """Ensures constant and matrix sizes match the configuration."""
        if self.rounds_f % 2 != 0:
            raise ValueError("rounds_f must be even.")

        expected_constants = (self.rounds_f + self.rounds_p) * self.width
        if len(self.round_constants) != expected_constants:
            raise ValueError("Incorrect number of round constants provided.")

        if len(self.mds) != self.width or any(len(row) != self.width for row in self.mds):
            raise ValueError("MDS matrix must be width x width.")

        return self


def params_for_width(width: int) -> PoseidonParams:
    """Build the Grain-derived parameter set for a state of `width` elements."""
    round_constants, mds = generate_parameters(width)
    return PoseidonParams(
        width=width,
        rounds_f=FULL_ROUNDS,
        rounds_p=PARTIAL_ROUNDS[width],
        round_constants=list(round_constants),
        mds=[list(row) for row in mds],
    )


def _mix(state: List[int], mds: List[List[int]]) -> List[int]:
    """Multiply the state by the MDS matrix."""
    return [sum(m * s for m, s in zip(row, state, strict=True)) % P for row in mds]


def permute(state: List[int], params: PoseidonParams) -> List[int]:
    """
    Performs the full Poseidon permutation on the given state.

    The permutation follows the structure:
    Full Rounds -> Partial Rounds -> Full Rounds

    Every round adds constants to the whole state, applies the S-box and
    mixes with the MDS matrix. Full rounds apply the S-box to every element,
    partial rounds only to the first.

    Args:
        state: Integers in `[0, P)`.
        params: The object defining the permutation's configuration.

    Returns:
        The new state after applying the permutation.
    """
    if len(state) != params.width:
        raise ValueError(f"Input state must have length {params.width}")

    half_rounds_f = params.rounds_f // 2
    total_rounds = params.rounds_f + params.rounds_p
    constants = params.round_constants
    state = list(state)

    for r in range(total_rounds):
        offset = r * params.width
        state = [(s + constants[offset + i]) % P for i, s in enumerate(state)]

        if r < half_rounds_f or r >= half_rounds_f + params.rounds_p:
            state = [pow(s, S_BOX_DEGREE, P) for s in state]
        else:
            # Hades partial round.
            state[0] = pow(state[0], S_BOX_DEGREE, P)

        state = _mix(state, params.mds)

    return state
