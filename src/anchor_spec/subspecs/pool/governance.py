"""Handler authorization with replay-protected nonces."""

from __future__ import annotations

import logging

from anchor_spec.types import InvalidNonce, Unauthorized

logger = logging.getLogger(__name__)

NONCE_WINDOW = 1048
"""How far ahead of the stored nonce a governance call may jump."""


class Governance:
    """
    The single account allowed to change a pool's edges and limits.

    Attributes:
        handler: The authorized account.
        nonce: The last accepted governance nonce.
    """

    def __init__(self, handler: bytes, nonce: int = 0) -> None:
        self.handler = bytes(handler)
        self.nonce = nonce

    def ensure_handler(self, caller: bytes) -> None:
        """
        Raises:
            Unauthorized: If `caller` is not the handler.
        """
        if bytes(caller) != self.handler:
            raise Unauthorized(caller)

    def check_nonce(self, nonce: int) -> None:
        """
        Require `nonce` to advance the stored nonce by at most `NONCE_WINDOW`.

        Raises:
            InvalidNonce: If `nonce <= self.nonce` or `nonce > self.nonce + NONCE_WINDOW`.
        """
        if not self.nonce < nonce <= self.nonce + NONCE_WINDOW:
            raise InvalidNonce(self.nonce, nonce)

    def set_handler(self, caller: bytes, handler: bytes, nonce: int) -> None:
        """
        Hand control to a new account.

        Raises:
            Unauthorized: If `caller` is not the current handler.
            InvalidNonce: If `nonce` does not advance within the window.
        """
        self.ensure_handler(caller)
        self.check_nonce(nonce)
        self.handler = bytes(handler)
        self.nonce = nonce
        logger.info("Handler changed to %s at nonce %d", self.handler.hex(), nonce)
