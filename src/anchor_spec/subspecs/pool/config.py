"""
Pool Configuration Specification

This file defines the limits and sizing parameters of the three pool
variants, and the presets selected by `ANCHOR_ENV`.
"""

from typing_extensions import Final

from anchor_spec.config import ANCHOR_ENV
from anchor_spec.types import StrictBaseModel, Uint32, Uint64, Uint128

from ..linkable.edge import ChainType

# --- Tree Parameters ---

DEFAULT_LEVELS: Final = Uint32(30)
"""Depth of a production commitment tree (about a billion leaves)."""

TEST_LEVELS: Final = Uint32(4)
"""Depth of a test tree, small enough to fill in a unit test."""

DEFAULT_MAX_EDGES: Final = Uint32(2)
"""The local tree plus one linked chain."""

# --- Chain Identity ---

DEFAULT_CHAIN_ID: Final = Uint64(1)
"""Numeric id of the chain hosting the pool."""

# --- Value Limits ---

MAX_FEE: Final = Uint128(2**64)
"""Largest relayer fee accepted by a variable-anchor transaction."""

MAX_EXT_AMOUNT: Final = Uint128(2**96)
"""Largest absolute external amount of a variable-anchor transaction."""

MAX_DEPOSIT_AMOUNT: Final = Uint128(2**96)
"""Largest deposit, adjustable by the handler."""

MIN_WITHDRAW_AMOUNT: Final = Uint128(0)
"""Smallest non-zero withdrawal, adjustable by the handler."""


class PoolConfig(StrictBaseModel):
    """
    Configuration of a variable-anchor pool.

    Instances are immutable. Governance replaces the whole model.
    """

    # Tree and registry sizing
    levels: Uint32
    max_edges: Uint32

    # Chain identity, bound into every proof
    chain_id: Uint64
    chain_type: ChainType = ChainType.SUBSTRATE

    # Limits
    max_fee: Uint128
    max_ext_amt: Uint128
    max_deposit_amt: Uint128
    min_withdraw_amt: Uint128


class MixerConfig(StrictBaseModel):
    """Configuration of a fixed-denomination, single-chain mixer."""

    levels: Uint32
    deposit_size: Uint128


class AnchorConfig(StrictBaseModel):
    """Configuration of a fixed-denomination pool linked to other chains."""

    levels: Uint32
    deposit_size: Uint128
    max_edges: Uint32
    chain_id: Uint64
    chain_type: ChainType = ChainType.SUBSTRATE


# The production variable-anchor configuration.
PROD_CONFIG: Final = PoolConfig(
    levels=DEFAULT_LEVELS,
    max_edges=DEFAULT_MAX_EDGES,
    chain_id=DEFAULT_CHAIN_ID,
    max_fee=MAX_FEE,
    max_ext_amt=MAX_EXT_AMOUNT,
    max_deposit_amt=MAX_DEPOSIT_AMOUNT,
    min_withdraw_amt=MIN_WITHDRAW_AMOUNT,
)

# A shallow configuration for tests.
TEST_CONFIG: Final = PoolConfig(
    levels=TEST_LEVELS,
    max_edges=DEFAULT_MAX_EDGES,
    chain_id=DEFAULT_CHAIN_ID,
    max_fee=MAX_FEE,
    max_ext_amt=MAX_EXT_AMOUNT,
    max_deposit_amt=MAX_DEPOSIT_AMOUNT,
    min_withdraw_amt=MIN_WITHDRAW_AMOUNT,
)

DEFAULT_CONFIG: Final = TEST_CONFIG if ANCHOR_ENV == "test" else PROD_CONFIG
"""The configuration selected by the `ANCHOR_ENV` environment flag."""
