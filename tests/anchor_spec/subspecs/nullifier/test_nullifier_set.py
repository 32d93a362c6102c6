"""Tests for the spent-nullifier set."""

from anchor_spec.subspecs.nullifier import NullifierSet
from anchor_spec.subspecs.storage import MemoryDatabase, SQLiteDatabase
from tests.anchor_spec.helpers import make_bytes32


def test_defaults_to_memory() -> None:
    assert isinstance(NullifierSet().database, MemoryDatabase)


def test_mark_spent() -> None:
    nullifiers = NullifierSet()
    assert not nullifiers.is_known(make_bytes32(1))
    nullifiers.mark_spent(make_bytes32(1))
    assert nullifiers.is_known(make_bytes32(1))


def test_mark_all_spent() -> None:
    nullifiers = NullifierSet()
    nullifiers.mark_all_spent(make_bytes32(i) for i in range(3))
    assert all(nullifiers.is_known(make_bytes32(i)) for i in range(3))
    assert not nullifiers.is_known(make_bytes32(3))


def test_marking_twice_is_a_no_op() -> None:
    nullifiers = NullifierSet()
    nullifiers.mark_spent(make_bytes32(1))
    nullifiers.mark_spent(make_bytes32(1))
    assert nullifiers.is_known(make_bytes32(1))


def test_shares_database() -> None:
    with SQLiteDatabase(":memory:") as db:
        NullifierSet(db).mark_spent(make_bytes32(1))
        assert NullifierSet(db).is_known(make_bytes32(1))
