"""Shielded pools: fixed-denomination mixer and anchor, variable-amount anchor."""

from .anchor import Anchor, AnchorWithdrawParams
from .config import (
    DEFAULT_CONFIG,
    PROD_CONFIG,
    TEST_CONFIG,
    AnchorConfig,
    MixerConfig,
    PoolConfig,
)
from .governance import NONCE_WINDOW, Governance
from .ledger import InMemoryLedger, Ledger, pay_out
from .mixer import Mixer, WithdrawParams
from .vanchor import VAnchor

__all__ = [
    "Mixer",
    "WithdrawParams",
    "Anchor",
    "AnchorWithdrawParams",
    "VAnchor",
    "PoolConfig",
    "MixerConfig",
    "AnchorConfig",
    "PROD_CONFIG",
    "TEST_CONFIG",
    "DEFAULT_CONFIG",
    "Governance",
    "NONCE_WINDOW",
    "Ledger",
    "InMemoryLedger",
    "pay_out",
]
