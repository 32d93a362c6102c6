"""Value movement out of the pool."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, List, Protocol, Sequence, Tuple

from anchor_spec.types import PayoutError, TransferError

logger = logging.getLogger(__name__)


class Ledger(Protocol):
    """
    Moves value from the pool to an account.

    Implementations raise `TransferError` when a transfer cannot be made.
    """

    def transfer(self, to: bytes, amount: int) -> None:
        """Pay `amount` from the pool to `to`."""
        ...


class InMemoryLedger:
    """
    A ledger holding the pool's balance and every account's receipts.

    Attributes:
        pool_balance: Value held by the pool.
        balances: Value received per account.
        transfers: Every transfer made, in order.
    """

    def __init__(self, pool_balance: int = 0) -> None:
        self.pool_balance = pool_balance
        self.balances: Dict[bytes, int] = defaultdict(int)
        self.transfers: List[Tuple[bytes, int]] = []

    def receive(self, amount: int) -> None:
        """Credit value attached to a deposit."""
        if amount < 0:
            raise ValueError(f"Cannot receive a negative amount: {amount}")
        self.pool_balance += amount

    def transfer(self, to: bytes, amount: int) -> None:
        """
        Pay out of the pool balance.

        Raises:
            TransferError: If the amount is negative or exceeds the pool balance.
        """
        if amount < 0:
            raise TransferError(f"Cannot transfer a negative amount: {amount}")
        if amount > self.pool_balance:
            raise TransferError(
                f"Insufficient pool balance: {self.pool_balance} < {amount}"
            )

        self.pool_balance -= amount
        self.balances[bytes(to)] += amount
        self.transfers.append((bytes(to), amount))
        logger.debug("Transferred %d to %s", amount, bytes(to).hex())

    def balance_of(self, account: bytes) -> int:
        """Value received by `account`."""
        return self.balances.get(bytes(account), 0)


def pay_out(
    ledger: Ledger,
    transfers: Sequence[Tuple[bytes, int]],
    *,
    nullifiers: Sequence[bytes] = (),
    leaf_indices: Sequence[int] = (),
) -> None:
    """
    Make each non-zero transfer exactly once, in order.

    Called only after pool state is committed, so a failure cannot be
    rolled back.

    Raises:
        PayoutError: On the first failed transfer, carrying what was committed.
    """
    for to, amount in transfers:
        if amount <= 0:
            continue
        try:
            ledger.transfer(to, amount)
        except TransferError as e:
            logger.error("Payout of %d to %s failed after commit: %s", amount, to.hex(), e)
            raise PayoutError(
                to, amount, nullifiers=nullifiers, leaf_indices=leaf_indices
            ) from e
