"""The set of spent nullifiers."""

from __future__ import annotations

from typing import Iterable

from anchor_spec.types import Bytes32

from ..storage.database import Database
from ..storage.memory import MemoryDatabase


class NullifierSet:
    """
    Grow-only membership set of spent nullifiers.

    There is no removal. Marking an already-spent nullifier is a no-op at
    this layer; callers reject a repeat before they get here.
    """

    def __init__(self, database: Database | None = None) -> None:
        self.database: Database = database if database is not None else MemoryDatabase()

    def is_known(self, nullifier: Bytes32) -> bool:
        """Whether `nullifier` has been spent."""
        return self.database.has_nullifier(nullifier)

    def mark_spent(self, nullifier: Bytes32) -> None:
        """Record one nullifier as spent."""
        self.database.put_nullifiers([nullifier])

    def mark_all_spent(self, nullifiers: Iterable[Bytes32]) -> None:
        """Record several nullifiers as spent in one storage transaction."""
        self.database.put_nullifiers(list(nullifiers))
