"""
Exception hierarchy for the shielded pool.

Every failure the pool can report is a subclass of `PoolError`. The
intermediate classes mirror how a caller must react:

- `CapacityError`: the operation cannot succeed on this instance. No state changed.
- `EdgeError`: a cross-chain edge update or lookup was refused. No state changed.
- `ValidationError`: the transaction is rejected. No state changed. Resubmit
  corrected inputs; never retry as-is.
- `CollaboratorError`: an injected capability (hash, verifier, ledger) failed.
  The post-commit variants carry what was already committed so operators
  can reconcile.
- `AuthorizationError`: the caller is not the configured handler.
"""

from __future__ import annotations

from typing import Sequence


class PoolError(Exception):
    """
    Base exception for all pool errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


# =================================================================
# Capacity
# =================================================================


class CapacityError(PoolError):
    """Base class for bounded-structure overflows."""


class TreeFull(CapacityError):
    """
    Raised when the accumulator cannot take more leaves.

    Attributes:
        levels: Depth of the tree.
        next_index: Index the next leaf would have received.
        requested: Number of leaves the caller tried to insert.
    """

    def __init__(self, levels: int, next_index: int, requested: int = 1) -> None:
        self.levels = levels
        self.next_index = next_index
        self.requested = requested
        super().__init__(
            f"Merkle tree of {levels} levels is full: next index {next_index}, "
            f"{requested} leaf(s) requested, capacity {2**levels}"
        )


class EdgeListFull(CapacityError):
    """
    Raised when registering a new chain would exceed `max_edges`.

    Attributes:
        chain_id: The chain that could not be registered.
        max_edges: The registry capacity.
    """

    def __init__(self, chain_id: int, max_edges: int) -> None:
        self.chain_id = chain_id
        self.max_edges = max_edges
        super().__init__(f"Edge list is full ({max_edges} edges), cannot add chain {chain_id}")


# =================================================================
# Edges
# =================================================================


class EdgeError(PoolError):
    """Base class for linkable-edge failures."""


class StaleOrReplayedEdge(EdgeError):
    """
    Raised when an edge update does not move the leaf index forward.

    The new index must be strictly greater than the stored one and less
    than the stored one plus the freshness window.

    Attributes:
        chain_id: The source chain of the update.
        previous_index: The stored `latest_leaf_index`.
        new_index: The rejected `latest_leaf_index`.
    """

    def __init__(self, chain_id: int, previous_index: int, new_index: int) -> None:
        self.chain_id = chain_id
        self.previous_index = previous_index
        self.new_index = new_index
        super().__init__(
            f"Edge update for chain {chain_id} rejected: leaf index {new_index} "
            f"does not advance {previous_index} within the freshness window"
        )


class EdgeNotFound(EdgeError):
    """
    Raised when a read names a chain that has no edge.

    Attributes:
        chain_id: The unknown chain.
    """

    def __init__(self, chain_id: int) -> None:
        self.chain_id = chain_id
        super().__init__(f"No edge registered for chain {chain_id}")


# =================================================================
# Validation
# =================================================================


class ValidationError(PoolError):
    """Base class for rejected transactions. Nothing is mutated."""


class UnmatchedEdges(ValidationError):
    """
    Raised when the proof's roots vector has the wrong length.

    Attributes:
        expected: The registry's `max_edges`.
        actual: The number of roots supplied.
    """

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {expected} roots, got {actual}")


class UnknownRoot(ValidationError):
    """Raised when the local root is not in the accumulator's history."""

    def __init__(self, root: bytes) -> None:
        self.root = root
        super().__init__(f"Root 0x{bytes(root).hex()} is not known")


class InvalidMerkleRoots(ValidationError):
    """Raised when the neighbor roots are not all recognized by the registry."""

    def __init__(self) -> None:
        super().__init__("Neighbor roots are not valid")


class AlreadyRevealedNullifier(ValidationError):
    """
    Raised when a nullifier was already spent or repeats within one proof.

    Attributes:
        nullifier: The offending nullifier.
    """

    def __init__(self, nullifier: bytes) -> None:
        self.nullifier = nullifier
        super().__init__(f"Nullifier 0x{bytes(nullifier).hex()} is already revealed")


class InvalidExtData(ValidationError):
    """Raised when the recomputed ext-data hash differs from the proof's."""

    def __init__(self, expected: bytes, actual: bytes) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Ext data hash mismatch: proof binds 0x{bytes(expected).hex()}, "
            f"ext data hashes to 0x{bytes(actual).hex()}"
        )


class _AmountError(ValidationError):
    """Shared shape of the amount and limit errors."""

    description: str = "amount"

    def __init__(self, amount: int, limit: int) -> None:
        self.amount = amount
        self.limit = limit
        super().__init__(f"Invalid {self.description}: {amount} (limit {limit})")


class InvalidFeeAmount(_AmountError):
    """Raised when `fee > max_fee`."""

    description = "fee amount"


class InvalidExtAmount(_AmountError):
    """Raised when `|ext_amount| > max_ext_amt`."""

    description = "ext amount"


class InvalidDepositAmount(_AmountError):
    """Raised when a deposit exceeds `max_deposit_amt` or the attached value differs."""

    description = "deposit amount"


class InvalidWithdrawAmount(_AmountError):
    """Raised when a withdrawal is below `min_withdraw_amt`."""

    description = "withdraw amount"


class InvalidDepositSize(_AmountError):
    """Raised when a fixed-denomination deposit carries the wrong value."""

    description = "deposit size"


class InvalidRefundAmount(_AmountError):
    """Raised when the attached value does not match the requested refund."""

    description = "refund amount"


class InvalidPublicAmount(ValidationError):
    """Raised when `public_amount` does not encode `ext_amount - fee`."""

    def __init__(self, expected: bytes, actual: bytes) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Public amount mismatch: expected 0x{bytes(expected).hex()}, "
            f"got 0x{bytes(actual).hex()}"
        )


class InvalidTxProof(ValidationError):
    """
    Raised when the proof is rejected or no circuit matches its shape.

    Attributes:
        shape: The `(inputs, outputs)` circuit shape, if known.
        reason: Why the proof was rejected.
    """

    def __init__(self, reason: str, shape: tuple[int, int] | None = None) -> None:
        self.shape = shape
        self.reason = reason
        suffix = f" for circuit {shape[0]}x{shape[1]}" if shape is not None else ""
        super().__init__(f"Invalid transaction proof{suffix}: {reason}")


# =================================================================
# Collaborators
# =================================================================


class CollaboratorError(PoolError):
    """Base class for failures surfaced from injected capabilities."""


class HashError(CollaboratorError):
    """Raised by a hasher on malformed input."""


class VerifyError(CollaboratorError):
    """Raised by a proof verifier on malformed proof bytes or inputs."""


class TransferError(CollaboratorError):
    """Raised by a ledger when a value transfer fails."""


class PayoutError(TransferError):
    """
    Raised when a payout fails after nullifiers and commitments were committed.

    The pool is left with spent nullifiers and inserted commitments but an
    incomplete payout. Operators must reconcile manually.

    Attributes:
        nullifiers: The nullifiers already marked spent.
        leaf_indices: The leaf indices already inserted.
        recipient: The payout target that failed.
        amount: The amount that was not transferred.
    """

    def __init__(
        self,
        recipient: bytes,
        amount: int,
        *,
        nullifiers: Sequence[bytes] = (),
        leaf_indices: Sequence[int] = (),
    ) -> None:
        self.recipient = recipient
        self.amount = amount
        self.nullifiers = list(nullifiers)
        self.leaf_indices = list(leaf_indices)
        super().__init__(
            f"Payout of {amount} to 0x{bytes(recipient).hex()} failed after commit "
            f"({len(self.nullifiers)} nullifier(s) spent, "
            f"{len(self.leaf_indices)} commitment(s) inserted)"
        )


class IncompleteCommitError(CollaboratorError):
    """
    Raised when inserting output commitments fails after nullifiers were spent.

    Attributes:
        nullifiers: The nullifiers already marked spent.
    """

    def __init__(self, nullifiers: Sequence[bytes], detail: str) -> None:
        self.nullifiers = list(nullifiers)
        super().__init__(
            f"Commit incomplete: {len(self.nullifiers)} nullifier(s) spent "
            f"but commitments were not inserted: {detail}"
        )


# =================================================================
# Authorization
# =================================================================


class AuthorizationError(PoolError):
    """Base class for governance failures."""


class Unauthorized(AuthorizationError):
    """Raised when the caller is not the configured handler."""

    def __init__(self, caller: bytes) -> None:
        self.caller = caller
        super().__init__(f"Caller 0x{bytes(caller).hex()} is not the handler")


class InvalidNonce(AuthorizationError):
    """
    Raised when a governance nonce does not advance within the allowed window.

    Attributes:
        current: The stored nonce.
        proposed: The rejected nonce.
    """

    def __init__(self, current: int, proposed: int) -> None:
        self.current = current
        self.proposed = proposed
        super().__init__(f"Invalid nonce {proposed} (current {current})")
