"""Tests for the linkable edge registry."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from anchor_spec.subspecs.linkable import (
    EDGE_FRESHNESS_WINDOW,
    FIRST_NEIGHBOR_ROOT_SLOT,
    LinkableEdgeRegistry,
)
from anchor_spec.subspecs.merkle import ROOT_HISTORY_SIZE
from anchor_spec.subspecs.storage import SQLiteDatabase
from anchor_spec.types import ZERO_HASH, EdgeListFull, EdgeNotFound, StaleOrReplayedEdge
from tests.anchor_spec.helpers import make_bytes32, make_edge

EMPTY_ROOT = make_bytes32(9999)


@pytest.fixture
def registry() -> LinkableEdgeRegistry:
    """A registry with four roots per transaction: the local one and three neighbors."""
    return LinkableEdgeRegistry(4, EMPTY_ROOT)


@pytest.fixture
def sqlite_db() -> Generator[SQLiteDatabase, None, None]:
    database = SQLiteDatabase(":memory:")
    yield database
    database.close()


def test_max_edges_must_be_positive() -> None:
    with pytest.raises(ValueError, match="max_edges must be at least 1"):
        LinkableEdgeRegistry(0, EMPTY_ROOT)


class TestUpdateEdge:
    """Linking chains and advancing their roots."""

    def test_new_chain_is_linked(self, registry: LinkableEdgeRegistry) -> None:
        root = make_bytes32(1)
        registry.update_edge(make_edge(5, root, 10))

        assert registry.has_edge(5)
        assert registry.edge_count == 1
        assert registry.chain_id_list == [5]
        assert registry.curr_neighbor_root_index[5] == FIRST_NEIGHBOR_ROOT_SLOT
        assert registry.neighbor_roots[5][FIRST_NEIGHBOR_ROOT_SLOT] == root
        assert registry.get_latest_neighbor_root(5) == root

    def test_advancing_update(self, registry: LinkableEdgeRegistry) -> None:
        first, second = make_bytes32(1), make_bytes32(2)
        registry.update_edge(make_edge(5, first, 5))
        registry.update_edge(make_edge(5, second, 10))

        assert registry.get_latest_neighbor_root(5) == second
        assert registry.is_known_neighbor_root(5, first)
        assert registry.is_known_neighbor_root(5, second)
        assert registry.edge_count == 1

    def test_replayed_update_rejected(self, registry: LinkableEdgeRegistry) -> None:
        registry.update_edge(make_edge(5, make_bytes32(1), 5))
        registry.update_edge(make_edge(5, make_bytes32(2), 10))

        for stale_index in (10, 9):
            with pytest.raises(StaleOrReplayedEdge) as exc_info:
                registry.update_edge(make_edge(5, make_bytes32(3), stale_index))
            assert exc_info.value.previous_index == 10
            assert exc_info.value.new_index == stale_index

        assert registry.get_latest_neighbor_root(5) == make_bytes32(2)
        assert not registry.is_known_neighbor_root(5, make_bytes32(3))

    def test_freshness_window(self, registry: LinkableEdgeRegistry) -> None:
        registry.update_edge(make_edge(5, make_bytes32(1), 0))

        with pytest.raises(StaleOrReplayedEdge):
            registry.update_edge(make_edge(5, make_bytes32(2), EDGE_FRESHNESS_WINDOW))

        registry.update_edge(make_edge(5, make_bytes32(3), EDGE_FRESHNESS_WINDOW - 1))
        assert registry.get_latest_neighbor_root(5) == make_bytes32(3)

    def test_capacity(self) -> None:
        registry = LinkableEdgeRegistry(2, EMPTY_ROOT)
        registry.update_edge(make_edge(5, make_bytes32(1), 1))
        registry.update_edge(make_edge(6, make_bytes32(2), 1))

        with pytest.raises(EdgeListFull) as exc_info:
            registry.update_edge(make_edge(7, make_bytes32(3), 1))
        assert exc_info.value.max_edges == 2
        assert not registry.has_edge(7)

        # Existing chains can still advance.
        registry.update_edge(make_edge(5, make_bytes32(4), 2))

    def test_ring_wraps(self, registry: LinkableEdgeRegistry) -> None:
        roots = [make_bytes32(i) for i in range(ROOT_HISTORY_SIZE + 1)]
        for index, root in enumerate(roots):
            registry.update_edge(make_edge(5, root, index))

        assert registry.curr_neighbor_root_index[5] == (
            FIRST_NEIGHBOR_ROOT_SLOT + ROOT_HISTORY_SIZE
        ) % ROOT_HISTORY_SIZE
        assert not registry.is_known_neighbor_root(5, roots[0])
        assert all(registry.is_known_neighbor_root(5, root) for root in roots[1:])


class TestNeighborRoots:
    """Membership and vector validation."""

    def test_unknown_chain_and_sentinel(self, registry: LinkableEdgeRegistry) -> None:
        registry.update_edge(make_edge(5, make_bytes32(1), 1))
        assert not registry.is_known_neighbor_root(6, make_bytes32(1))
        assert not registry.is_known_neighbor_root(5, ZERO_HASH)

    def test_valid_vector(self, registry: LinkableEdgeRegistry) -> None:
        registry.update_edge(make_edge(5, make_bytes32(1), 1))
        registry.update_edge(make_edge(6, make_bytes32(2), 1))
        assert registry.is_valid_neighbor_roots([make_bytes32(1), make_bytes32(2), EMPTY_ROOT])

    def test_positions_follow_link_order(self, registry: LinkableEdgeRegistry) -> None:
        registry.update_edge(make_edge(5, make_bytes32(1), 1))
        registry.update_edge(make_edge(6, make_bytes32(2), 1))
        assert not registry.is_valid_neighbor_roots(
            [make_bytes32(2), make_bytes32(1), EMPTY_ROOT]
        )

    def test_wrong_length(self, registry: LinkableEdgeRegistry) -> None:
        assert not registry.is_valid_neighbor_roots([EMPTY_ROOT, EMPTY_ROOT])
        assert not registry.is_valid_neighbor_roots([EMPTY_ROOT] * 4)

    def test_unlinked_positions_carry_empty_root(self, registry: LinkableEdgeRegistry) -> None:
        """
        A root at an unlinked position belongs to no tracked tree.

        The circuit proves membership in any root of the vector, so accepting
        an arbitrary value there would let a prover spend notes from a tree of
        its own making. Zero padding is rejected for the same reason.
        """
        assert registry.is_valid_neighbor_roots([EMPTY_ROOT] * 3)
        assert not registry.is_valid_neighbor_roots([EMPTY_ROOT, make_bytes32(1), EMPTY_ROOT])
        assert not registry.is_valid_neighbor_roots([EMPTY_ROOT, EMPTY_ROOT, ZERO_HASH])

    def test_every_linked_chain_needs_a_position(self) -> None:
        registry = LinkableEdgeRegistry(2, EMPTY_ROOT)
        registry.update_edge(make_edge(5, make_bytes32(1), 1))
        assert registry.is_valid_neighbor_roots([make_bytes32(1)])

        # A second chain fits the registry but not the one-slot vector.
        registry.update_edge(make_edge(6, make_bytes32(2), 1))
        assert registry.has_edge(6)
        assert not registry.is_valid_neighbor_roots([make_bytes32(1)])
        assert not registry.is_valid_neighbor_roots([make_bytes32(2)])

    def test_stale_but_recent_root_is_valid(self, registry: LinkableEdgeRegistry) -> None:
        registry.update_edge(make_edge(5, make_bytes32(1), 1))
        registry.update_edge(make_edge(5, make_bytes32(2), 2))
        assert registry.is_valid_neighbor_roots([make_bytes32(1), EMPTY_ROOT, EMPTY_ROOT])

    def test_single_edge_registry(self) -> None:
        registry = LinkableEdgeRegistry(1, EMPTY_ROOT)
        assert registry.is_valid_neighbor_roots([])


class TestQueries:
    """Reads of the latest edges."""

    def test_missing_chain(self, registry: LinkableEdgeRegistry) -> None:
        with pytest.raises(EdgeNotFound):
            registry.get_latest_neighbor_root(5)

    def test_latest_edges_in_link_order(self, registry: LinkableEdgeRegistry) -> None:
        registry.update_edge(make_edge(6, make_bytes32(2), 1))
        registry.update_edge(make_edge(5, make_bytes32(1), 1))
        registry.update_edge(make_edge(6, make_bytes32(3), 2))

        edges = registry.get_latest_neighbor_edges()
        assert [int(edge.chain_id) for edge in edges] == [6, 5]
        assert registry.get_neighbor_roots() == [make_bytes32(3), make_bytes32(1)]


class TestPersistence:
    """A registry reopened over a database."""

    def test_reopen_keeps_latest_root_only(self, sqlite_db: SQLiteDatabase) -> None:
        registry = LinkableEdgeRegistry(4, EMPTY_ROOT, sqlite_db)
        registry.update_edge(make_edge(6, make_bytes32(1), 1))
        registry.update_edge(make_edge(5, make_bytes32(2), 1))
        registry.update_edge(make_edge(6, make_bytes32(3), 2))

        reopened = LinkableEdgeRegistry(4, EMPTY_ROOT, sqlite_db)

        assert reopened.chain_id_list == [6, 5]
        assert reopened.get_latest_neighbor_root(6) == make_bytes32(3)
        assert not reopened.is_known_neighbor_root(6, make_bytes32(1))

        # Freshness is checked against the stored leaf index.
        with pytest.raises(StaleOrReplayedEdge):
            reopened.update_edge(make_edge(6, make_bytes32(4), 2))
