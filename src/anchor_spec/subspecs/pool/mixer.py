"""
Fixed-denomination mixer.

Every deposit carries exactly `deposit_size`. A withdrawal proves knowledge
of one deposited note under a known root and pays `deposit_size - fee` to
the recipient and `fee` to the relayer.
"""

from __future__ import annotations

import logging

from pydantic import Field

from anchor_spec.types import (
    AlreadyRevealedNullifier,
    Bytes32,
    InvalidDepositSize,
    InvalidFeeAmount,
    InvalidRefundAmount,
    InvalidTxProof,
    StrictBaseModel,
    Uint128,
    UnknownRoot,
    VerifyError,
)

from ..merkle.accumulator import MerkleAccumulator
from ..nullifier.nullifier_set import NullifierSet
from ..poseidon.hasher import PoseidonHasher, TreeHasher
from ..storage.database import Database
from ..transaction.public_inputs import assemble_withdraw_inputs
from ..transaction.verifiers import ProofVerifier
from .config import MixerConfig
from .ledger import Ledger, pay_out

logger = logging.getLogger(__name__)


class WithdrawParams(StrictBaseModel):
    """
    Public inputs and payout targets of a mixer withdrawal.

    Attributes:
        proof: Opaque proof bytes.
        root: The tree root the proof was built against.
        nullifier_hash: Nullifier of the spent note.
        recipient: Receives `deposit_size - fee` and the refund.
        relayer: Receives `fee`.
        fee: Relayer fee, at most `deposit_size`.
        refund: Value the relayer attaches and forwards to the recipient.
    """

    proof: bytes
    root: Bytes32
    nullifier_hash: Bytes32
    recipient: bytes = Field(min_length=20, max_length=32)
    relayer: bytes = Field(min_length=20, max_length=32)
    fee: Uint128 = Uint128(0)
    refund: Uint128 = Uint128(0)


def check_withdraw_amounts(
    deposit_size: int, fee: int, refund: int, transferred_value: int
) -> None:
    """
    Raises:
        InvalidFeeAmount: If the fee exceeds the denomination.
        InvalidRefundAmount: If the attached value differs from the refund.
    """
    if fee > deposit_size:
        raise InvalidFeeAmount(fee, deposit_size)
    if transferred_value != refund:
        raise InvalidRefundAmount(transferred_value, refund)


def verify_withdraw_proof(verifier: ProofVerifier, public_inputs: bytes, proof: bytes) -> None:
    """
    Raises:
        InvalidTxProof: If the verifier rejects or cannot parse the proof.
    """
    try:
        accepted = verifier.verify(public_inputs, proof)
    except VerifyError as e:
        raise InvalidTxProof(f"verifier error: {e.message}") from e
    if not accepted:
        raise InvalidTxProof("proof rejected")


class Mixer:
    """A single-chain, fixed-denomination shielded pool."""

    def __init__(
        self,
        config: MixerConfig,
        verifier: ProofVerifier,
        ledger: Ledger,
        hasher: TreeHasher | None = None,
        database: Database | None = None,
    ) -> None:
        self.config = config
        self.verifier = verifier
        self.ledger = ledger
        self.merkle = MerkleAccumulator(int(config.levels), hasher or PoseidonHasher())
        self.nullifiers = NullifierSet(database)

    def deposit(self, commitment: Bytes32, transferred_value: int) -> int:
        """
        Insert a commitment backed by exactly one denomination.

        Raises:
            InvalidDepositSize: If `transferred_value != deposit_size`.
            TreeFull: If the tree is full.
        """
        if transferred_value != self.config.deposit_size:
            raise InvalidDepositSize(transferred_value, int(self.config.deposit_size))

        leaf_index = self.merkle.insert(commitment)
        logger.info("Deposit %s at leaf %d", commitment.hex(), leaf_index)
        return leaf_index

    def withdraw(self, params: WithdrawParams, transferred_value: int = 0) -> None:
        """
        Spend one note and pay out.

        Raises:
            UnknownRoot: If `params.root` is not a recent root.
            AlreadyRevealedNullifier: If the note was already spent.
            InvalidFeeAmount: If the fee exceeds the denomination.
            InvalidRefundAmount: If the attached value differs from the refund.
            InvalidTxProof: If the proof does not verify.
            PayoutError: If a transfer fails after the nullifier was spent.
        """
        deposit_size, fee, refund = (
            int(self.config.deposit_size),
            int(params.fee),
            int(params.refund),
        )

        if not self.merkle.is_known_root(params.root):
            raise UnknownRoot(params.root)
        if self.nullifiers.is_known(params.nullifier_hash):
            raise AlreadyRevealedNullifier(params.nullifier_hash)
        check_withdraw_amounts(deposit_size, fee, refund, transferred_value)

        public_inputs = assemble_withdraw_inputs(
            params.nullifier_hash,
            params.recipient,
            params.relayer,
            fee,
            refund,
            [params.root],
        )
        verify_withdraw_proof(self.verifier, public_inputs, params.proof)

        self.nullifiers.mark_spent(params.nullifier_hash)
        logger.info("Withdrawal spent nullifier %s", params.nullifier_hash.hex())

        pay_out(
            self.ledger,
            [
                (params.recipient, deposit_size - fee),
                (params.relayer, fee),
                (params.recipient, refund),
            ],
            nullifiers=[params.nullifier_hash],
        )

    def is_known_root(self, root: Bytes32) -> bool:
        return self.merkle.is_known_root(root)

    def is_known_nullifier(self, nullifier: Bytes32) -> bool:
        return self.nullifiers.is_known(nullifier)

    def get_last_root(self) -> Bytes32:
        return self.merkle.get_last_root()
