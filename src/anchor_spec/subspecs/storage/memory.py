"""In-memory implementation of the Database protocol."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from anchor_spec.subspecs.linkable.edge import Edge
    from anchor_spec.types import Bytes32


class MemoryDatabase:
    """
    Dictionary-backed storage with no persistence.

    Python dicts keep insertion order and overwriting a key keeps its
    position, which is exactly the edge ordering the registry needs.
    """

    def __init__(self) -> None:
        self._nullifiers: set[bytes] = set()
        self._edges: dict[int, Edge] = {}

    def has_nullifier(self, nullifier: Bytes32) -> bool:
        return bytes(nullifier) in self._nullifiers

    def put_nullifiers(self, nullifiers: Iterable[Bytes32]) -> None:
        # Materialize first so a failing iterable leaves the set untouched.
        batch = [bytes(n) for n in nullifiers]
        self._nullifiers.update(batch)

    def get_edge(self, chain_id: int) -> Edge | None:
        return self._edges.get(int(chain_id))

    def put_edge(self, edge: Edge) -> None:
        self._edges[int(edge.chain_id)] = edge

    def get_chain_ids(self) -> list[int]:
        return list(self._edges)

    def close(self) -> None:
        self._nullifiers.clear()
        self._edges.clear()
