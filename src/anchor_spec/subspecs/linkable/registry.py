"""
Registry of sibling pools on other chains.

Each linked chain has one `Edge` (its latest reported root) and a private
ring of its last `ROOT_HISTORY_SIZE` roots. A proof may spend against any
root still in a chain's ring, which tolerates relayer lag between chains.

Edges live in the `Database`. Rings are in-memory lists. A registry
reopened over an existing database seeds each ring with the stored edge's
root only, so older neighbor roots are not recognized after a restart.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from anchor_spec.types import (
    ZERO_HASH,
    Bytes32,
    EdgeListFull,
    EdgeNotFound,
    StaleOrReplayedEdge,
)

from ..merkle.accumulator import ROOT_HISTORY_SIZE
from ..storage.database import Database
from ..storage.memory import MemoryDatabase
from .edge import EDGE_FRESHNESS_WINDOW, Edge

logger = logging.getLogger(__name__)

FIRST_NEIGHBOR_ROOT_SLOT = 1
"""Ring slot that receives a newly linked chain's first root."""


class LinkableEdgeRegistry:
    """
    Tracks known roots of up to `max_edges` sibling chains.

    Args:
        max_edges: Registry capacity. A transaction's roots vector has
            exactly this many entries: the local root and `max_edges - 1`
            neighbor roots.
        empty_root: Root of an empty sibling tree. Roots vector positions
            with no linked chain must carry this value.
        database: Edge storage. Defaults to a fresh in-memory database.
    """

    def __init__(
        self,
        max_edges: int,
        empty_root: Bytes32,
        database: Database | None = None,
    ) -> None:
        if max_edges < 1:
            raise ValueError(f"max_edges must be at least 1, got {max_edges}")

        self.max_edges = max_edges
        self.empty_root = empty_root
        self.database: Database = database if database is not None else MemoryDatabase()

        self.chain_id_list: List[int] = []
        self.neighbor_roots: Dict[int, List[Bytes32]] = {}
        self.curr_neighbor_root_index: Dict[int, int] = {}

        for chain_id in self.database.get_chain_ids():
            edge = self.database.get_edge(chain_id)
            if edge is None:
                raise EdgeNotFound(chain_id)
            self._link(chain_id, edge.root)

    def _link(self, chain_id: int, root: Bytes32) -> None:
        """Start a chain's ring with `root` at the first slot."""
        ring = [ZERO_HASH] * ROOT_HISTORY_SIZE
        ring[FIRST_NEIGHBOR_ROOT_SLOT] = root
        self.neighbor_roots[chain_id] = ring
        self.curr_neighbor_root_index[chain_id] = FIRST_NEIGHBOR_ROOT_SLOT
        self.chain_id_list.append(chain_id)

    @property
    def edge_count(self) -> int:
        """Number of linked chains."""
        return len(self.chain_id_list)

    def has_edge(self, chain_id: int) -> bool:
        """Whether `chain_id` is linked."""
        return chain_id in self.neighbor_roots

    def update_edge(self, edge: Edge) -> None:
        """
        Record a new root for a sibling chain, linking it if unknown.

        Raises:
            StaleOrReplayedEdge: If the leaf index does not advance, or
                advances by `EDGE_FRESHNESS_WINDOW` or more.
            EdgeListFull: If linking a new chain would exceed `max_edges`.
        """
        chain_id = int(edge.chain_id)
        previous = self.database.get_edge(chain_id)

        if previous is not None:
            old_index = int(previous.latest_leaf_index)
            new_index = int(edge.latest_leaf_index)
            if not old_index < new_index < old_index + EDGE_FRESHNESS_WINDOW:
                raise StaleOrReplayedEdge(chain_id, old_index, new_index)

            self.database.put_edge(edge)
            slot = (self.curr_neighbor_root_index[chain_id] + 1) % ROOT_HISTORY_SIZE
            self.curr_neighbor_root_index[chain_id] = slot
            self.neighbor_roots[chain_id][slot] = edge.root
            logger.info(
                "Updated edge for chain %d: leaf index %d -> %d",
                chain_id,
                old_index,
                new_index,
            )
            return

        if self.edge_count + 1 > self.max_edges:
            raise EdgeListFull(chain_id, self.max_edges)

        self.database.put_edge(edge)
        self._link(chain_id, edge.root)
        logger.info("Linked chain %d at leaf index %d", chain_id, int(edge.latest_leaf_index))

    def is_known_neighbor_root(self, chain_id: int, root: Bytes32) -> bool:
        """
        Whether `root` is among the last `ROOT_HISTORY_SIZE` roots of `chain_id`.

        The zero sentinel and unknown chains are never known.
        """
        if root == ZERO_HASH:
            return False

        ring = self.neighbor_roots.get(chain_id)
        if ring is None:
            return False

        i = self.curr_neighbor_root_index[chain_id]
        for _ in range(ROOT_HISTORY_SIZE):
            if ring[i] == root:
                return True
            i = (i - 1) % ROOT_HISTORY_SIZE
        return False

    def is_valid_neighbor_roots(self, roots: Sequence[Bytes32]) -> bool:
        """
        Whether `roots` is an acceptable neighbor-roots vector.

        The vector must hold exactly `max_edges - 1` roots. Position `i` is
        checked against the `i`-th linked chain in link order, so every linked
        chain needs a position: with `max_edges` chains linked no vector is
        valid. Positions past the last linked chain must equal the empty-tree
        root.
        """
        if len(roots) != self.max_edges - 1:
            logger.debug("Expected %d neighbor roots, got %d", self.max_edges - 1, len(roots))
            return False

        if self.edge_count > len(roots):
            logger.debug(
                "%d linked chains but only %d neighbor roots", self.edge_count, len(roots)
            )
            return False

        for position, root in enumerate(roots):
            if position < self.edge_count:
                chain_id = self.chain_id_list[position]
                if not self.is_known_neighbor_root(chain_id, root):
                    logger.debug("Unknown root %s for chain %d", root.hex(), chain_id)
                    return False
            elif root != self.empty_root:
                logger.debug("Position %d has no linked chain but a non-empty root", position)
                return False
        return True

    def get_latest_neighbor_root(self, chain_id: int) -> Bytes32:
        """
        The most recent root recorded for `chain_id`.

        Raises:
            EdgeNotFound: If the chain is not linked.
        """
        if not self.has_edge(chain_id):
            raise EdgeNotFound(chain_id)
        return self.neighbor_roots[chain_id][self.curr_neighbor_root_index[chain_id]]

    def get_latest_neighbor_edges(self) -> List[Edge]:
        """Every linked chain's edge, in link order."""
        edges = []
        for chain_id in self.chain_id_list:
            edge = self.database.get_edge(chain_id)
            if edge is None:
                raise EdgeNotFound(chain_id)
            edges.append(edge)
        return edges

    def get_neighbor_roots(self) -> List[Bytes32]:
        """Every linked chain's latest root, in link order."""
        return [edge.root for edge in self.get_latest_neighbor_edges()]
