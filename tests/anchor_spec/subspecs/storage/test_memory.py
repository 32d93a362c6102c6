"""Tests for the in-memory database."""

import pytest

from anchor_spec.subspecs.storage import MemoryDatabase
from tests.anchor_spec.helpers import make_bytes32, make_edge


def test_close_clears_state() -> None:
    db = MemoryDatabase()
    db.put_nullifiers([make_bytes32(1)])
    db.put_edge(make_edge(5, make_bytes32(2), 1))

    db.close()

    assert not db.has_nullifier(make_bytes32(1))
    assert db.get_chain_ids() == []


def test_failed_batch_writes_nothing() -> None:
    def nullifiers():
        yield make_bytes32(1)
        raise RuntimeError("producer failed")

    db = MemoryDatabase()
    with pytest.raises(RuntimeError, match="producer failed"):
        db.put_nullifiers(nullifiers())
    assert not db.has_nullifier(make_bytes32(1))
