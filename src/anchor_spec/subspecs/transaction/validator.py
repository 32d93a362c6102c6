"""
Validation and commit of a shielded transaction.

`validate` runs every check against the current pool state and the
injected capabilities without mutating anything. `commit` then spends the
nullifiers and inserts the output commitments. External value movement is
the caller's job and happens only after `commit` returns.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, List

from anchor_spec.types import (
    AlreadyRevealedNullifier,
    Bytes32,
    IncompleteCommitError,
    InvalidDepositAmount,
    InvalidExtAmount,
    InvalidExtData,
    InvalidFeeAmount,
    InvalidMerkleRoots,
    InvalidPublicAmount,
    InvalidTxProof,
    InvalidWithdrawAmount,
    PoolError,
    TreeFull,
    UnknownRoot,
    UnmatchedEdges,
    VerifyError,
)

from ..linkable.registry import LinkableEdgeRegistry
from ..merkle.accumulator import MerkleAccumulator
from ..nullifier.nullifier_set import NullifierSet
from .ext_data import BindHasher, ExtData, KeccakBindHasher
from .proof_data import ProofData
from .public_inputs import assemble_public_inputs, public_amount
from .verifiers import VerifierRegistry

if TYPE_CHECKING:
    from ..pool.config import PoolConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidatedTransaction:
    """A transaction that passed every check and may be committed once."""

    proof_data: ProofData
    ext_data: ExtData


class TransactionValidator:
    """
    Decides whether a transaction may mutate the pool.

    Args:
        merkle: The local commitment tree.
        registry: Roots of linked chains.
        nullifiers: Spent nullifiers.
        verifiers: One proof verifier per circuit shape.
        config: Limits and chain identity. Replaced whenever governance
            changes a limit, and read afresh by every call.
        bind_hasher: Hash binding `ExtData` to the proof.
    """

    def __init__(
        self,
        merkle: MerkleAccumulator,
        registry: LinkableEdgeRegistry,
        nullifiers: NullifierSet,
        verifiers: VerifierRegistry,
        config: PoolConfig,
        bind_hasher: BindHasher | None = None,
    ) -> None:
        self.merkle = merkle
        self.registry = registry
        self.nullifiers = nullifiers
        self.verifiers = verifiers
        self.config = config
        self.bind_hasher: BindHasher = bind_hasher or KeccakBindHasher()

    # -------------------------------------------------------------------------
    # Checks
    # -------------------------------------------------------------------------

    def _check_roots(self, proof_data: ProofData) -> None:
        if len(proof_data.roots) != self.registry.max_edges:
            raise UnmatchedEdges(self.registry.max_edges, len(proof_data.roots))

        local_root = proof_data.roots[0]
        if not self.merkle.is_known_root(local_root):
            raise UnknownRoot(local_root)

        if not self.registry.is_valid_neighbor_roots(proof_data.roots[1:]):
            raise InvalidMerkleRoots()

    def _check_nullifiers(self, proof_data: ProofData) -> None:
        seen: set[bytes] = set()
        for nullifier in proof_data.input_nullifiers:
            if bytes(nullifier) in seen or self.nullifiers.is_known(nullifier):
                raise AlreadyRevealedNullifier(nullifier)
            seen.add(bytes(nullifier))

    def _check_ext_data(self, proof_data: ProofData, ext_data: ExtData) -> None:
        computed = self.bind_hasher.hash(ext_data.encode())
        if computed != proof_data.ext_data_hash:
            raise InvalidExtData(proof_data.ext_data_hash, computed)

    def _check_limits(self, ext_data: ExtData) -> None:
        config = self.config
        fee, ext_amount = int(ext_data.fee), ext_data.ext_amount

        if fee > config.max_fee:
            raise InvalidFeeAmount(fee, int(config.max_fee))
        if abs(ext_amount) > config.max_ext_amt:
            raise InvalidExtAmount(ext_amount, int(config.max_ext_amt))
        if ext_amount > config.max_deposit_amt:
            raise InvalidDepositAmount(ext_amount, int(config.max_deposit_amt))
        if 0 < -ext_amount < config.min_withdraw_amt:
            raise InvalidWithdrawAmount(-ext_amount, int(config.min_withdraw_amt))

    def _check_public_amount(self, proof_data: ProofData, ext_data: ExtData) -> None:
        expected = public_amount(ext_data.ext_amount, int(ext_data.fee))
        if expected != proof_data.public_amount:
            raise InvalidPublicAmount(expected, proof_data.public_amount)

    def _check_proof(self, proof_data: ProofData) -> None:
        shape = proof_data.shape
        verifier = self.verifiers.get(shape)
        if verifier is None:
            raise InvalidTxProof("no verifier for this circuit shape", shape)

        inputs = assemble_public_inputs(
            proof_data, int(self.config.chain_id), self.config.chain_type
        )
        try:
            accepted = verifier.verify(inputs, proof_data.proof)
        except VerifyError as e:
            raise InvalidTxProof(f"verifier error: {e.message}", shape) from e

        if not accepted:
            raise InvalidTxProof("proof rejected", shape)

    # -------------------------------------------------------------------------
    # Protocol
    # -------------------------------------------------------------------------

    def validate(self, proof_data: ProofData, ext_data: ExtData) -> ValidatedTransaction:
        """
        Run every check in order and stop at the first failure.

        Nothing is mutated, whether the checks pass or fail.

        Raises:
            ValidationError: The specific subclass for the first failing check.
            TreeFull: If the output commitments would not fit.
        """
        try:
            self._check_roots(proof_data)
            self._check_nullifiers(proof_data)
            self._check_ext_data(proof_data, ext_data)
            self._check_limits(ext_data)
            self._check_public_amount(proof_data, ext_data)
            self._check_proof(proof_data)
        except PoolError as e:
            logger.warning("Transaction rejected: %s", e.message)
            raise

        outputs = len(proof_data.output_commitments)
        if not self.merkle.has_capacity(outputs):
            raise TreeFull(self.merkle.levels, self.merkle.next_index, outputs)

        logger.debug("Transaction validated for circuit %dx%d", *proof_data.shape)
        return ValidatedTransaction(proof_data=proof_data, ext_data=ext_data)

    def commit(self, validated: ValidatedTransaction) -> List[int]:
        """
        Spend the nullifiers, then insert the output commitments.

        Returns:
            The leaf indices of the inserted commitments.

        Raises:
            IncompleteCommitError: If inserting fails after the nullifiers
                were spent. Carries the spent nullifiers.
        """
        nullifiers: List[Bytes32] = list(validated.proof_data.input_nullifiers)
        self.nullifiers.mark_all_spent(nullifiers)

        try:
            indices = self.merkle.insert_many(validated.proof_data.output_commitments)
        except PoolError as e:
            logger.error("Commitments not inserted after spending nullifiers: %s", e.message)
            raise IncompleteCommitError(nullifiers, e.message) from e

        logger.info(
            "Committed transaction: %d nullifier(s) spent, leaves %s",
            len(nullifiers),
            indices,
        )
        return indices

    def transact(self, proof_data: ProofData, ext_data: ExtData) -> List[int]:
        """Validate and commit in one call."""
        return self.commit(self.validate(proof_data, ext_data))
