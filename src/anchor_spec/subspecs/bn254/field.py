"""Core definition of the BN254 scalar field."""

from anchor_spec.types import Bytes32

# =================================================================
# Field Constants
#
# The proving system works over the scalar field of the BN254 curve
# (also called alt_bn128). Every root, nullifier, commitment and public
# input is an element of this field.
# =================================================================

P: int = 21888242871839275222246405745257275088548364400416034343698204186575808495617
"""The BN254 scalar field modulus (the curve order `r`)."""

P_BITS: int = 254
"""The number of bits in the modulus P."""

P_BYTES: int = 32
"""The size of an encoded field element in bytes."""


# =================================================================
# Conversions
# =================================================================


def reduce_bytes(data: bytes) -> int:
    """Read `data` as a big-endian integer and reduce it modulo P."""
    return int.from_bytes(data, "big") % P


def to_element(data: bytes) -> Bytes32:
    """
    Map arbitrary bytes to a canonical 32-byte element.

    Used where outside data (keccak digests, caller-supplied leaves) must
    enter the field without rejection.
    """
    return Bytes32.from_int(reduce_bytes(data))


def encode_signed(value: int) -> Bytes32:
    """
    Encode a signed integer into the field.

    Non-negative values encode as themselves. Negative values wrap to
    `P + value`, the representation the circuit uses for outgoing amounts.

    Raises:
        ValueError: If `|value| >= P`, where the encoding would alias.
    """
    if not -P < value < P:
        raise ValueError(f"{value} does not fit in the scalar field")
    return Bytes32.from_int(value % P)
