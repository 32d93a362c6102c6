"""Cross-chain edges and the registry of sibling-pool roots."""

from .edge import (
    EDGE_FRESHNESS_WINDOW,
    ChainType,
    Edge,
    chain_id_type,
    chain_id_type_element,
)
from .registry import FIRST_NEIGHBOR_ROOT_SLOT, LinkableEdgeRegistry

__all__ = [
    "Edge",
    "ChainType",
    "chain_id_type",
    "chain_id_type_element",
    "EDGE_FRESHNESS_WINDOW",
    "FIRST_NEIGHBOR_ROOT_SLOT",
    "LinkableEdgeRegistry",
]
