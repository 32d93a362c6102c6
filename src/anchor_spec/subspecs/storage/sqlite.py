"""
SQLite database implementation for pool storage.

This module provides persistent storage for the unbounded pool state:

- Spent nullifiers, one row each
- Cross-chain edges indexed by source chain id

Fixed-width values are stored as raw big-endian bytes in BLOB columns.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Iterable

from anchor_spec.subspecs.linkable.edge import Edge
from anchor_spec.types import Bytes32, Uint32, Uint64

from .namespaces import ALL_NAMESPACES, EDGES, NULLIFIERS


class SQLiteDatabase:
    """
    SQLite implementation of the Database protocol.

    Stores pool data in a single SQLite file.
    """

    def __init__(self, path: Path | str) -> None:
        """
        Initialize SQLite database.

        Creates database file and tables if they don't exist.

        Args:
            path: Path to SQLite database file.
                  Use ":memory:" for in-memory database.
        """
        self._path = Path(path) if isinstance(path, str) else path
        self._conn = sqlite3.connect(str(self._path))

        # Row factory enables dict-like access: row["column_name"].
        self._conn.row_factory = sqlite3.Row

        self._init_schema()

    def _init_schema(self) -> None:
        """Create tables if they don't exist."""
        cursor = self._conn.cursor()
        for namespace in ALL_NAMESPACES:
            cursor.execute(namespace.CREATE_TABLE)
        self._conn.commit()

    # -------------------------------------------------------------------------
    # Nullifier Operations
    # -------------------------------------------------------------------------

    def has_nullifier(self, nullifier: Bytes32) -> bool:
        """Check if a nullifier has been spent."""
        cursor = self._conn.cursor()
        cursor.execute(
            f"SELECT 1 FROM {NULLIFIERS.TABLE_NAME} WHERE nullifier = ?",
            (bytes(nullifier),),
        )
        return cursor.fetchone() is not None

    def put_nullifiers(self, nullifiers: Iterable[Bytes32]) -> None:
        """Mark nullifiers as spent in one transaction."""
        # The connection context manager commits on success and rolls back
        # on any exception, so either every nullifier lands or none does.
        with self._conn:
            self._conn.executemany(
                f"INSERT OR IGNORE INTO {NULLIFIERS.TABLE_NAME} (nullifier) VALUES (?)",
                [(bytes(n),) for n in nullifiers],
            )

    # -------------------------------------------------------------------------
    # Edge Operations
    # -------------------------------------------------------------------------

    def get_edge(self, chain_id: int) -> Edge | None:
        """Retrieve the edge for a source chain."""
        cursor = self._conn.cursor()
        cursor.execute(
            f"""
            SELECT root, latest_leaf_index, target FROM {EDGES.TABLE_NAME}
            WHERE chain_id = ?
            """,
            (Uint64(chain_id).to_bytes(),),
        )
        row = cursor.fetchone()
        if row is None:
            return None

        return Edge(
            chain_id=Uint64(chain_id),
            root=Bytes32(row["root"]),
            latest_leaf_index=Uint32(row["latest_leaf_index"]),
            target=Bytes32(row["target"]),
        )

    def put_edge(self, edge: Edge) -> None:
        """Insert or overwrite the edge for `edge.chain_id`."""
        # Upsert in place: the rowid, and so the chain's position in
        # `get_chain_ids`, must survive an overwrite.
        with self._conn:
            self._conn.execute(
                f"""
                INSERT INTO {EDGES.TABLE_NAME} (chain_id, root, latest_leaf_index, target)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(chain_id) DO UPDATE SET
                    root = excluded.root,
                    latest_leaf_index = excluded.latest_leaf_index,
                    target = excluded.target
                """,
                (
                    edge.chain_id.to_bytes(),
                    bytes(edge.root),
                    int(edge.latest_leaf_index),
                    bytes(edge.target),
                ),
            )

    def get_chain_ids(self) -> list[int]:
        """List chains with an edge, in insertion order."""
        cursor = self._conn.cursor()
        cursor.execute(f"SELECT chain_id FROM {EDGES.TABLE_NAME} ORDER BY rowid")
        return [int.from_bytes(row["chain_id"], "big") for row in cursor.fetchall()]

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Close database connection."""
        self._conn.close()

    def __enter__(self) -> SQLiteDatabase:
        """Context manager entry."""
        return self

    def __exit__(self, *args: object) -> None:
        """Context manager exit - closes connection."""
        self.close()
