"""Tests for per-shape verifier dispatch and proof data."""

import pytest
from pydantic import ValidationError

from anchor_spec.subspecs.transaction import ProofData, VerifierRegistry
from anchor_spec.types import Bytes32
from tests.anchor_spec.helpers import FakeVerifier, make_bytes32, make_ext_data, make_proof_data


def test_registry_lookup() -> None:
    small, large = FakeVerifier(), FakeVerifier()
    registry = VerifierRegistry({(2, 2): small})
    registry.register((16, 2), large)

    assert registry.get((2, 2)) is small
    assert registry.get((16, 2)) is large
    assert registry.get((1, 1)) is None
    assert (2, 2) in registry
    assert (1, 1) not in registry
    assert registry.shapes == [(2, 2), (16, 2)]


def test_register_replaces() -> None:
    first, second = FakeVerifier(), FakeVerifier()
    registry = VerifierRegistry()
    registry.register((2, 2), first)
    registry.register((2, 2), second)
    assert registry.get((2, 2)) is second


def test_proof_data_shape() -> None:
    proof_data = make_proof_data(
        [make_bytes32(1)],
        make_ext_data(),
        nullifiers=[make_bytes32(i) for i in range(16)],
        commitments=[make_bytes32(20), make_bytes32(21)],
    )
    assert proof_data.shape == (16, 2)


def _proof_data(roots: list) -> ProofData:
    return ProofData(
        proof=b"",
        public_amount=Bytes32.zero(),
        roots=roots,
        input_nullifiers=[],
        output_commitments=[],
        ext_data_hash=Bytes32.zero(),
    )


def test_proof_data_leaves_roots_length_to_the_validator() -> None:
    assert _proof_data([]).roots == []


def test_proof_data_rejects_short_root() -> None:
    with pytest.raises(ValidationError):
        _proof_data([b"\x01" * 31])
