"""
Fixed-denomination pool linked to sibling pools on other chains.

A withdrawal may spend a note deposited on any linked chain. The proof
commits to the local root and one root per linked chain, in link order.
"""

from __future__ import annotations

import logging
from typing import List

from pydantic import Field

from anchor_spec.types import (
    AlreadyRevealedNullifier,
    Bytes32,
    InvalidDepositSize,
    InvalidMerkleRoots,
    StrictBaseModel,
    Uint128,
    UnknownRoot,
    UnmatchedEdges,
)

from ..linkable.edge import Edge
from ..linkable.registry import LinkableEdgeRegistry
from ..merkle.accumulator import MerkleAccumulator
from ..nullifier.nullifier_set import NullifierSet
from ..poseidon.hasher import PoseidonHasher, TreeHasher
from ..storage.database import Database
from ..transaction.public_inputs import assemble_withdraw_inputs
from ..transaction.verifiers import ProofVerifier
from .config import AnchorConfig
from .governance import Governance
from .ledger import Ledger, pay_out
from .mixer import check_withdraw_amounts, verify_withdraw_proof

logger = logging.getLogger(__name__)


class AnchorWithdrawParams(StrictBaseModel):
    """Public inputs and payout targets of an anchor withdrawal."""

    proof: bytes
    roots: List[Bytes32]
    nullifier_hash: Bytes32
    recipient: bytes = Field(min_length=20, max_length=32)
    relayer: bytes = Field(min_length=20, max_length=32)
    fee: Uint128 = Uint128(0)
    refund: Uint128 = Uint128(0)


class Anchor:
    """A fixed-denomination pool with a linkable edge registry."""

    def __init__(
        self,
        config: AnchorConfig,
        verifier: ProofVerifier,
        ledger: Ledger,
        handler: bytes,
        hasher: TreeHasher | None = None,
        database: Database | None = None,
    ) -> None:
        self.config = config
        self.verifier = verifier
        self.ledger = ledger
        self.governance = Governance(handler)
        self.merkle = MerkleAccumulator(int(config.levels), hasher or PoseidonHasher())
        self.registry = LinkableEdgeRegistry(
            int(config.max_edges), self.merkle.zeros.empty_root, database
        )
        self.nullifiers = NullifierSet(self.registry.database)

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

    def withdraw(self, params: AnchorWithdrawParams, transferred_value: int = 0) -> None:
        """
        Spend one note deposited on this or any linked chain.

        Raises:
            UnmatchedEdges: If `len(params.roots) != max_edges`.
            UnknownRoot: If the local root is not recent.
            InvalidMerkleRoots: If a neighbor root is not recognized.
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

        if len(params.roots) != self.registry.max_edges:
            raise UnmatchedEdges(self.registry.max_edges, len(params.roots))
        if not self.merkle.is_known_root(params.roots[0]):
            raise UnknownRoot(params.roots[0])
        if not self.registry.is_valid_neighbor_roots(params.roots[1:]):
            raise InvalidMerkleRoots()
        if self.nullifiers.is_known(params.nullifier_hash):
            raise AlreadyRevealedNullifier(params.nullifier_hash)
        check_withdraw_amounts(deposit_size, fee, refund, transferred_value)

        public_inputs = assemble_withdraw_inputs(
            params.nullifier_hash,
            params.recipient,
            params.relayer,
            fee,
            refund,
            params.roots,
            chain_id=int(self.config.chain_id),
            chain_type=self.config.chain_type,
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

    def update_edge(self, caller: bytes, edge: Edge) -> None:
        """
        Record a sibling chain's root. Handler only.

        Raises:
            Unauthorized: If `caller` is not the handler.
            StaleOrReplayedEdge: If the leaf index does not advance within the window.
            EdgeListFull: If linking a new chain would exceed `max_edges`.
        """
        self.governance.ensure_handler(caller)
        self.registry.update_edge(edge)

    def is_known_root(self, root: Bytes32) -> bool:
        return self.merkle.is_known_root(root)

    def is_known_nullifier(self, nullifier: Bytes32) -> bool:
        return self.nullifiers.is_known(nullifier)

    def get_last_root(self) -> Bytes32:
        return self.merkle.get_last_root()
