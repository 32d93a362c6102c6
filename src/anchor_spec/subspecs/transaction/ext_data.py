"""
Public transaction metadata and its hash binding.

The circuit does not see recipient, relayer, amounts or the encrypted
notes directly. It commits to `ext_data_hash`, and the pool recomputes
that hash from the plaintext `ExtData` so that a proof cannot be replayed
with different payout metadata.
"""

from __future__ import annotations

from typing import Protocol

from Crypto.Hash import keccak
from pydantic import Field

from anchor_spec.types import Bytes32, StrictBaseModel, Uint128

from ..bn254.field import to_element

I128_MIN = -(2**127)
I128_MAX = 2**127 - 1


def _len_prefixed(data: bytes) -> bytes:
    """A 4-byte big-endian length followed by the bytes."""
    return len(data).to_bytes(4, "big") + data


class ExtData(StrictBaseModel):
    """
    Transaction metadata bound into the proof by hash.

    Attributes:
        recipient: Payout target of a withdrawal.
        relayer: Account that submitted the transaction and earns `fee`.
        ext_amount: Net value entering (positive) or leaving (negative) the pool.
        fee: Relayer fee.
        encrypted_output1: Ciphertext of the first output note.
        encrypted_output2: Ciphertext of the second output note.
    """

    recipient: bytes = Field(min_length=20, max_length=32)
    relayer: bytes = Field(min_length=20, max_length=32)
    ext_amount: int = Field(ge=I128_MIN, le=I128_MAX)
    fee: Uint128
    encrypted_output1: bytes = b""
    encrypted_output2: bytes = b""

    def encode(self) -> bytes:
        """
        Deterministic byte encoding of every field.

        Layout:
            len32(recipient) ‖ recipient ‖ len32(relayer) ‖ relayer ‖
            int256_be(ext_amount) ‖ uint256_be(fee) ‖
            len32(encrypted_output1) ‖ encrypted_output1 ‖
            len32(encrypted_output2) ‖ encrypted_output2
        """
        return b"".join(
            [
                _len_prefixed(self.recipient),
                _len_prefixed(self.relayer),
                self.ext_amount.to_bytes(32, "big", signed=True),
                int(self.fee).to_bytes(32, "big"),
                _len_prefixed(self.encrypted_output1),
                _len_prefixed(self.encrypted_output2),
            ]
        )


class BindHasher(Protocol):
    """General-purpose hash from bytes into a field element."""

    def hash(self, data: bytes) -> Bytes32:
        """Hash `data` to a canonical 32-byte field element."""
        ...


class KeccakBindHasher:
    """keccak-256 of the input, read big-endian and reduced modulo P."""

    def hash(self, data: bytes) -> Bytes32:
        k = keccak.new(digest_bits=256)
        k.update(data)
        return to_element(k.digest())


def ext_data_hash(ext_data: ExtData, hasher: BindHasher | None = None) -> Bytes32:
    """The binding hash a prover must commit to for `ext_data`."""
    return (hasher or KeccakBindHasher()).hash(ext_data.encode())
