"""
Database namespace definitions for storage tables.

Defines table names and schema constants for SQLite storage.
Each namespace represents a logical grouping of related data.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class NullifierNamespace:
    """
    Namespace for spent nullifiers.

    A row's presence is the whole record.
    """

    TABLE_NAME: str = "nullifiers"
    """Table name for nullifier storage."""

    CREATE_TABLE: str = """
        CREATE TABLE IF NOT EXISTS nullifiers (
            nullifier BLOB PRIMARY KEY
        )
    """
    """SQL to create nullifiers table."""


@dataclass(frozen=True, slots=True)
class EdgeNamespace:
    """
    Namespace for cross-chain edges.

    Chain ids are stored as 8-byte big-endian blobs, since SQLite integers
    are signed and cannot hold every 64-bit chain id. The implicit rowid
    records insertion order.
    """

    TABLE_NAME: str = "edges"
    """Table name for edge storage."""

    CREATE_TABLE: str = """
        CREATE TABLE IF NOT EXISTS edges (
            chain_id BLOB PRIMARY KEY,
            root BLOB NOT NULL,
            latest_leaf_index INTEGER NOT NULL,
            target BLOB NOT NULL
        )
    """
    """SQL to create edges table."""


# Singleton instances for convenient access
NULLIFIERS = NullifierNamespace()
EDGES = EdgeNamespace()

ALL_NAMESPACES = [NULLIFIERS, EDGES]
"""All namespace definitions for schema initialization."""
