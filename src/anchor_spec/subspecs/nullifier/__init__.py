"""Spent-nullifier tracking."""

from .nullifier_set import NullifierSet

__all__ = ["NullifierSet"]
