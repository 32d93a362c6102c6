"""
Storage module for spent nullifiers and cross-chain edges.

Provides a database abstraction with an in-memory and a SQLite backend.
"""

from .database import Database
from .memory import MemoryDatabase
from .namespaces import EdgeNamespace, NullifierNamespace
from .sqlite import SQLiteDatabase

__all__ = [
    "Database",
    "MemoryDatabase",
    "SQLiteDatabase",
    "NullifierNamespace",
    "EdgeNamespace",
]
