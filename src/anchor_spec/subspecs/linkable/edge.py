"""Cross-chain edge records and the typed chain identifier."""

from enum import IntEnum

from anchor_spec.types import Bytes8, Bytes32, StrictBaseModel, Uint32, Uint64

EDGE_FRESHNESS_WINDOW = 65536
"""
Maximum forward step of `latest_leaf_index` in a single edge update.

An update advancing by this much or more is treated as forged or wildly
out of date.
"""


class ChainType(IntEnum):
    """Two-byte tag identifying the family of a chain."""

    EVM = 0x0100
    SUBSTRATE = 0x0200
    POLKADOT_RELAY = 0x0301
    KUSAMA_RELAY = 0x0302
    COSMOS = 0x0400
    SOLANA = 0x0500


def chain_id_type(chain_id: int, chain_type: ChainType = ChainType.SUBSTRATE) -> Bytes8:
    """
    Pack a chain id with its type tag into 8 big-endian bytes.

    Layout: `[0, 0, type_hi, type_lo, id_3, id_2, id_1, id_0]`. Only the low
    32 bits of the chain id are kept, the width every circuit expects.

    Raises:
        OverflowError: If `chain_id` does not fit in 32 bits.
    """
    return Bytes8(
        b"\x00\x00"
        + int(chain_type).to_bytes(2, "big")
        + int(chain_id).to_bytes(4, "big")
    )


def chain_id_type_element(chain_id: int, chain_type: ChainType = ChainType.SUBSTRATE) -> Bytes32:
    """The typed chain id as a 32-byte public input (left-padded with zeros)."""
    return Bytes32.from_int(chain_id_type(chain_id, chain_type).to_int())


class Edge(StrictBaseModel):
    """
    The latest known state of a sibling pool on another chain.

    Attributes:
        chain_id: Source chain of the sibling pool.
        root: The sibling's Merkle root.
        latest_leaf_index: The sibling's leaf count when `root` was taken.
        target: Opaque identifier of the sibling pool (resource id).
    """

    chain_id: Uint64
    root: Bytes32
    latest_leaf_index: Uint32
    target: Bytes32
