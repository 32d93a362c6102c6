"""
Shared pytest fixtures for all anchor_spec tests.

Provides core fixtures used across multiple test modules.
Import these fixtures automatically via pytest discovery.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from anchor_spec.subspecs.merkle import MerkleAccumulator
from anchor_spec.subspecs.pool import InMemoryLedger, VAnchor
from anchor_spec.subspecs.poseidon import PoseidonHasher
from anchor_spec.subspecs.transaction import VerifierRegistry
from tests.anchor_spec.helpers import HANDLER, FakeVerifier, make_pool_config

SUPPORTED_SHAPES = [(2, 2), (16, 2)]
"""Circuit shapes every test pool accepts."""


@pytest.fixture(scope="session")
def hasher() -> PoseidonHasher:
    """A Poseidon tree hasher, shared so its parameters are generated once."""
    return PoseidonHasher()


@pytest.fixture
def accumulator(hasher: PoseidonHasher) -> MerkleAccumulator:
    """An empty 4-level accumulator."""
    return MerkleAccumulator(4, hasher)


@pytest.fixture
def verifier() -> FakeVerifier:
    """A verifier accepting every proof."""
    return FakeVerifier()


@pytest.fixture
def ledger() -> InMemoryLedger:
    """A ledger with enough balance for any test payout."""
    return InMemoryLedger(pool_balance=10**30)


@pytest.fixture
def vanchor_factory(
    hasher: PoseidonHasher, verifier: FakeVerifier, ledger: InMemoryLedger
) -> Callable[..., VAnchor]:
    """Factory for variable-anchor pools with configurable limits."""

    def _create(**config_overrides: int) -> VAnchor:
        verifiers = VerifierRegistry({shape: verifier for shape in SUPPORTED_SHAPES})
        return VAnchor(
            make_pool_config(**config_overrides),
            verifiers,
            ledger,
            HANDLER,
            hasher=hasher,
        )

    return _create


@pytest.fixture
def vanchor(vanchor_factory: Callable[..., VAnchor]) -> VAnchor:
    """A variable-anchor pool with default test limits."""
    return vanchor_factory()
