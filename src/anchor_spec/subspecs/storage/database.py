"""
Abstract database interface for pool storage.

Defines the Protocol that all database implementations must follow.
Uses structural subtyping for flexibility.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Protocol

if TYPE_CHECKING:
    from anchor_spec.subspecs.linkable.edge import Edge
    from anchor_spec.types import Bytes32


class Database(Protocol):
    """
    Protocol for the unbounded parts of pool state.

    Root histories are fixed-size rings held in memory by their owners. Only
    spent nullifiers and cross-chain edges, whose domains are unbounded,
    live behind this interface.

    Storage Organization
    --------------------
    - Nullifiers: Set of spent 32-byte markers
    - Edges: Indexed by source chain id, iterable in insertion order
    """

    # -------------------------------------------------------------------------
    # Nullifier Operations
    # -------------------------------------------------------------------------

    def has_nullifier(self, nullifier: Bytes32) -> bool:
        """
        Check if a nullifier has been spent.

        Args:
            nullifier: The 32-byte nullifier.

        Returns:
            True if the nullifier is stored.
        """
        ...

    def put_nullifiers(self, nullifiers: Iterable[Bytes32]) -> None:
        """
        Mark nullifiers as spent in a single atomic write.

        Storing an already-present nullifier is a no-op.

        Args:
            nullifiers: The nullifiers to store.
        """
        ...

    # -------------------------------------------------------------------------
    # Edge Operations
    # -------------------------------------------------------------------------

    def get_edge(self, chain_id: int) -> Edge | None:
        """
        Retrieve the edge for a source chain.

        Args:
            chain_id: The source chain id.

        Returns:
            Edge if found, None otherwise.
        """
        ...

    def put_edge(self, edge: Edge) -> None:
        """
        Insert or overwrite the edge for `edge.chain_id`.

        Overwriting keeps the chain's original insertion position.

        Args:
            edge: Edge to store.
        """
        ...

    def get_chain_ids(self) -> list[int]:
        """
        List the chains with an edge, in the order they were first stored.

        Returns:
            Chain ids in insertion order.
        """
        ...

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Close database connection and release resources."""
        ...
