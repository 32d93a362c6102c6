"""
Variable-amount anchor pool.

Notes carry arbitrary amounts. A transaction spends up to N notes and
creates M, with `ext_amount` entering or leaving the pool and `fee` paid to
the relayer. Proof validation is delegated to `TransactionValidator`; this
class adds the attached-value check, the payouts and governance.
"""

from __future__ import annotations

import logging
from typing import List

from anchor_spec.types import Bytes32, InvalidDepositAmount, Uint32, Uint64, Uint128

from ..linkable.edge import Edge
from ..linkable.registry import LinkableEdgeRegistry
from ..merkle.accumulator import MerkleAccumulator
from ..nullifier.nullifier_set import NullifierSet
from ..poseidon.hasher import PoseidonHasher, TreeHasher
from ..storage.database import Database
from ..transaction.ext_data import BindHasher, ExtData
from ..transaction.proof_data import ProofData
from ..transaction.validator import TransactionValidator
from ..transaction.verifiers import VerifierRegistry
from .config import PoolConfig
from .governance import Governance
from .ledger import Ledger, pay_out

logger = logging.getLogger(__name__)


class VAnchor:
    """
    A linkable shielded pool with variable amounts.

    Args:
        config: Sizing, chain identity and limits.
        verifiers: One verifier per supported circuit shape.
        ledger: Pays withdrawals and fees.
        handler: The account allowed to update edges and limits.
        hasher: Tree hash. Defaults to Poseidon.
        bind_hasher: Ext-data hash. Defaults to keccak-256.
        database: Storage for nullifiers and edges. Defaults to memory.
    """

    def __init__(
        self,
        config: PoolConfig,
        verifiers: VerifierRegistry,
        ledger: Ledger,
        handler: bytes,
        hasher: TreeHasher | None = None,
        bind_hasher: BindHasher | None = None,
        database: Database | None = None,
    ) -> None:
        self.ledger = ledger
        self.governance = Governance(handler)
        self.merkle = MerkleAccumulator(int(config.levels), hasher or PoseidonHasher())
        self.registry = LinkableEdgeRegistry(
            int(config.max_edges), self.merkle.zeros.empty_root, database
        )
        self.nullifiers = NullifierSet(self.registry.database)
        self.validator = TransactionValidator(
            self.merkle,
            self.registry,
            self.nullifiers,
            verifiers,
            config,
            bind_hasher,
        )

    @property
    def config(self) -> PoolConfig:
        """The live configuration, shared with the validator."""
        return self.validator.config

    # -------------------------------------------------------------------------
    # Value flow
    # -------------------------------------------------------------------------

    def deposit(self, commitment: Bytes32) -> int:
        """
        Insert a commitment without a proof.

        Raises:
            TreeFull: If the tree is full.
        """
        leaf_index = self.merkle.insert(commitment)
        logger.info("Commitment %s added at leaf %d", commitment.hex(), leaf_index)
        return leaf_index

    def transact(
        self,
        proof_data: ProofData,
        ext_data: ExtData,
        transferred_value: int = 0,
    ) -> List[int]:
        """
        Validate, commit, then pay out.

        Args:
            proof_data: The proof and its public values.
            ext_data: The plaintext metadata bound by `proof_data.ext_data_hash`.
            transferred_value: Value attached by the caller. Must equal the
                deposited part of `ext_amount`.

        Returns:
            Leaf indices of the output commitments.

        Raises:
            ValidationError: If any check fails. Nothing is mutated.
            InvalidDepositAmount: If the attached value is wrong. Nothing is mutated.
            IncompleteCommitError: If inserting fails after spending nullifiers.
            PayoutError: If a transfer fails after commit.
        """
        validated = self.validator.validate(proof_data, ext_data)

        expected_value = max(ext_data.ext_amount, 0)
        if transferred_value != expected_value:
            raise InvalidDepositAmount(transferred_value, expected_value)

        leaf_indices = self.validator.commit(validated)

        pay_out(
            self.ledger,
            [
                (ext_data.recipient, -ext_data.ext_amount),
                (ext_data.relayer, int(ext_data.fee)),
            ],
            nullifiers=proof_data.input_nullifiers,
            leaf_indices=leaf_indices,
        )
        return leaf_indices

    # -------------------------------------------------------------------------
    # Governance
    # -------------------------------------------------------------------------

    def update_edge(
        self,
        caller: bytes,
        src_chain_id: int,
        root: Bytes32,
        leaf_index: int,
        target: Bytes32,
    ) -> None:
        """
        Record a sibling chain's root. Handler only.

        Raises:
            Unauthorized: If `caller` is not the handler.
            StaleOrReplayedEdge: If the leaf index does not advance within the window.
            EdgeListFull: If linking a new chain would exceed `max_edges`.
        """
        self.governance.ensure_handler(caller)
        edge = Edge(
            chain_id=Uint64(src_chain_id),
            root=root,
            latest_leaf_index=Uint32(leaf_index),
            target=target,
        )
        self.registry.update_edge(edge)

    def set_handler(self, caller: bytes, handler: bytes, nonce: int) -> None:
        """Hand control to a new account. See `Governance.set_handler`."""
        self.governance.set_handler(caller, handler, nonce)

    def configure_max_deposit_limit(self, caller: bytes, amount: int) -> None:
        """Replace `max_deposit_amt`. Handler only."""
        self.governance.ensure_handler(caller)
        self.validator.config = self.config.model_copy(
            update={"max_deposit_amt": Uint128(amount)}
        )
        logger.info("Max deposit limit set to %d", amount)

    def configure_min_withdrawal_limit(self, caller: bytes, amount: int) -> None:
        """Replace `min_withdraw_amt`. Handler only."""
        self.governance.ensure_handler(caller)
        self.validator.config = self.config.model_copy(
            update={"min_withdraw_amt": Uint128(amount)}
        )
        logger.info("Min withdrawal limit set to %d", amount)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def is_known_root(self, root: Bytes32) -> bool:
        return self.merkle.is_known_root(root)

    def is_known_nullifier(self, nullifier: Bytes32) -> bool:
        return self.nullifiers.is_known(nullifier)

    def get_latest_neighbor_root(self, chain_id: int) -> Bytes32:
        return self.registry.get_latest_neighbor_root(chain_id)

    def get_neighbor_roots(self) -> List[Bytes32]:
        return self.registry.get_neighbor_roots()

    def get_last_root(self) -> Bytes32:
        return self.merkle.get_last_root()
