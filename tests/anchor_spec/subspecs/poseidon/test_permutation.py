"""
Tests for the Poseidon permutation over BN254.
"""

from typing import List

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from pydantic import ValidationError

from anchor_spec.subspecs.bn254 import P
from anchor_spec.subspecs.poseidon import PoseidonParams, params_for_width, permute


@pytest.fixture(scope="module")
def params() -> PoseidonParams:
    return params_for_width(3)


def test_params_for_width(params: PoseidonParams) -> None:
    assert params.width == 3
    assert params.rounds_f == 8
    assert params.rounds_p == 57
    assert len(params.round_constants) == 65 * 3


def test_permutation_is_deterministic(params: PoseidonParams) -> None:
    state = [0, 1, 2]
    assert permute(state, params) == permute(state, params)
    assert state == [0, 1, 2], "input state must not be mutated"


def test_output_is_canonical(params: PoseidonParams) -> None:
    output = permute([0, P - 1, P - 2], params)
    assert len(output) == 3
    assert all(0 <= x < P for x in output)


def test_wrong_state_length(params: PoseidonParams) -> None:
    with pytest.raises(ValueError, match="Input state must have length 3"):
        permute([0, 1], params)


@settings(max_examples=20)
@given(
    st.lists(st.integers(min_value=0, max_value=P - 1), min_size=3, max_size=3),
    st.integers(min_value=0, max_value=2),
)
def test_single_element_change_changes_output(
    params: PoseidonParams, state: List[int], position: int
) -> None:
    """A permutation is injective: changing one input changes the output."""
    changed = list(state)
    changed[position] = (changed[position] + 1) % P
    assert permute(state, params) != permute(changed, params)


class TestParamsValidation:
    """Invalid parameter sets are rejected at construction."""

    def test_odd_full_rounds(self, params: PoseidonParams) -> None:
        with pytest.raises(ValidationError, match="rounds_f must be even"):
            PoseidonParams(
                width=3,
                rounds_f=7,
                rounds_p=57,
                round_constants=params.round_constants[:-3],
                mds=params.mds,
            )

    def test_constant_count(self, params: PoseidonParams) -> None:
        with pytest.raises(ValidationError, match="Incorrect number of round constants"):
            PoseidonParams(
                width=3,
                rounds_f=8,
                rounds_p=57,
                round_constants=params.round_constants[:-1],
                mds=params.mds,
            )

    def test_mds_shape(self, params: PoseidonParams) -> None:
        with pytest.raises(ValidationError, match="MDS matrix must be width x width"):
            PoseidonParams(
                width=3,
                rounds_f=8,
                rounds_p=57,
                round_constants=params.round_constants,
                mds=params.mds[:2],
            )
