"""Specifications for the BN254 scalar field."""

from .field import P_BITS, P_BYTES, P, encode_signed, reduce_bytes, to_element

__all__ = [
    "P",
    "P_BITS",
    "P_BYTES",
    "encode_signed",
    "reduce_bytes",
    "to_element",
]
