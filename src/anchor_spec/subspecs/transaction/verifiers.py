"""Proof-verification capability and per-shape dispatch."""

from __future__ import annotations

from typing import Dict, Mapping, Protocol, Tuple

Shape = Tuple[int, int]
"""A circuit shape: `(number of input nullifiers, number of output commitments)`."""


class ProofVerifier(Protocol):
    """
    Verifies one circuit's proofs.

    Returns False for a well-formed proof that does not verify. Raises
    `VerifyError` for malformed proof bytes or public inputs.
    """

    def verify(self, public_inputs: bytes, proof: bytes) -> bool:
        """Check `proof` against concatenated 32-byte public inputs."""
        ...


class VerifierRegistry:
    """Maps each supported circuit shape to its verifier."""

    def __init__(self, verifiers: Mapping[Shape, ProofVerifier] | None = None) -> None:
        self._verifiers: Dict[Shape, ProofVerifier] = dict(verifiers or {})

    def register(self, shape: Shape, verifier: ProofVerifier) -> None:
        """Install or replace the verifier for `shape`."""
        self._verifiers[shape] = verifier

    def get(self, shape: Shape) -> ProofVerifier | None:
        """The verifier for `shape`, if any."""
        return self._verifiers.get(shape)

    def __contains__(self, shape: object) -> bool:
        return shape in self._verifiers

    @property
    def shapes(self) -> list[Shape]:
        """Supported shapes, sorted."""
        return sorted(self._verifiers)
