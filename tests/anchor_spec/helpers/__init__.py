"""Test helpers for anchor_spec unit tests."""

from .builders import (
    HANDLER,
    TEST_PROOF,
    Groth16Fixture,
    make_account,
    make_bytes32,
    make_edge,
    make_ext_data,
    make_groth16_fixture,
    make_pool_config,
    make_proof_data,
    make_roots,
)
from .mocks import FailingHasher, FailingLedger, FakeVerifier

__all__ = [
    # Builders
    "HANDLER",
    "TEST_PROOF",
    "Groth16Fixture",
    "make_account",
    "make_bytes32",
    "make_edge",
    "make_ext_data",
    "make_groth16_fixture",
    "make_pool_config",
    "make_proof_data",
    "make_roots",
    # Mocks
    "FakeVerifier",
    "FailingHasher",
    "FailingLedger",
]
