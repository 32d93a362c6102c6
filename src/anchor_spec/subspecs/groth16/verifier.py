"""
Groth16 verification over the BN254 pairing.

A proof `(A, B, C)` for public inputs `x_1 .. x_n` is accepted when

    e(A, B) = e(alpha, beta) * e(vk_x, gamma) * e(C, delta)

with `vk_x = IC_0 + sum(x_i * IC_i)`. The check multiplies the four
pairings of the rearranged equation and compares the product with one.

Wire layout (big-endian, 32 bytes per base-field coordinate):

- G1 point: `x ‖ y` (64 bytes). All zeros is the point at infinity.
- G2 point: `x_im ‖ x_re ‖ y_im ‖ y_re` (128 bytes), the EIP-197 order.
- Proof: `A (G1) ‖ B (G2) ‖ C (G1)` (256 bytes).
- Public inputs: concatenated 32-byte scalars, each below the curve order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from py_ecc import bn128
from py_ecc.fields import bn128_FQ as FQ
from py_ecc.fields import bn128_FQ2 as FQ2

from anchor_spec.types import VerifyError

G1Point = Optional[Tuple[FQ, FQ]]
G2Point = Optional[Tuple[FQ2, FQ2]]

COORDINATE_BYTES = 32
G1_BYTES = 2 * COORDINATE_BYTES
G2_BYTES = 4 * COORDINATE_BYTES
PROOF_BYTES = 2 * G1_BYTES + G2_BYTES

# Elliptic Curve operations
mult = bn128.multiply
add = bn128.add
neg = bn128.neg
pairing = bn128.pairing


# =================================================================
# Point encoding
# =================================================================


def _read_coordinate(data: bytes, offset: int) -> int:
    value = int.from_bytes(data[offset : offset + COORDINATE_BYTES], "big")
    if value >= bn128.field_modulus:
        raise VerifyError(f"Coordinate at byte {offset} is not a base-field element")
    return value


def decode_g1(data: bytes) -> G1Point:
    """
    Decode and validate a G1 point.

    Raises:
        VerifyError: On wrong length, non-canonical coordinates, or a point off the curve.
    """
    if len(data) != G1_BYTES:
        raise VerifyError(f"G1 point must be {G1_BYTES} bytes, got {len(data)}")
    if not any(data):
        return None

    point = (FQ(_read_coordinate(data, 0)), FQ(_read_coordinate(data, 32)))
    if not bn128.is_on_curve(point, bn128.b):
        raise VerifyError("G1 point is not on the curve")
    return point


def decode_g2(data: bytes) -> G2Point:
    """
    Decode and validate a G2 point, including the subgroup check.

    Raises:
        VerifyError: On wrong length, non-canonical coordinates, or an invalid point.
    """
    if len(data) != G2_BYTES:
        raise VerifyError(f"G2 point must be {G2_BYTES} bytes, got {len(data)}")
    if not any(data):
        return None

    x_im, x_re, y_im, y_re = (_read_coordinate(data, i * 32) for i in range(4))
    point = (FQ2([x_re, x_im]), FQ2([y_re, y_im]))
    if not bn128.is_on_curve(point, bn128.b2):
        raise VerifyError("G2 point is not on the twist curve")
    if mult(point, bn128.curve_order) is not None:
        raise VerifyError("G2 point is not in the prime-order subgroup")
    return point


def encode_g1(point: G1Point) -> bytes:
    """Serialize a G1 point."""
    if point is None:
        return bytes(G1_BYTES)
    x, y = point
    return int(x).to_bytes(32, "big") + int(y).to_bytes(32, "big")


def encode_g2(point: G2Point) -> bytes:
    """Serialize a G2 point."""
    if point is None:
        return bytes(G2_BYTES)
    x, y = point
    x_re, x_im = x.coeffs
    y_re, y_im = y.coeffs
    return b"".join(int(c).to_bytes(32, "big") for c in (x_im, x_re, y_im, y_re))


# =================================================================
# Keys and proofs
# =================================================================


@dataclass(frozen=True)
class Groth16Proof:
    """The three group elements of a Groth16 proof."""

    a: G1Point
    b: G2Point
    c: G1Point

    def encode(self) -> bytes:
        """Serialize as `A ‖ B ‖ C`."""
        return encode_g1(self.a) + encode_g2(self.b) + encode_g1(self.c)

    @classmethod
    def decode(cls, data: bytes) -> Groth16Proof:
        """
        Parse and validate proof bytes.

        Raises:
            VerifyError: If the bytes do not encode three valid points.
        """
        if len(data) != PROOF_BYTES:
            raise VerifyError(f"Proof must be {PROOF_BYTES} bytes, got {len(data)}")
        return cls(
            a=decode_g1(data[:G1_BYTES]),
            b=decode_g2(data[G1_BYTES : G1_BYTES + G2_BYTES]),
            c=decode_g1(data[G1_BYTES + G2_BYTES :]),
        )


@dataclass(frozen=True)
class VerifyingKey:
    """
    A circuit's verifying key.

    `ic` holds one G1 point per public input plus the constant term at
    index 0.
    """

    alpha_g1: G1Point
    beta_g2: G2Point
    gamma_g2: G2Point
    delta_g2: G2Point
    ic: Tuple[G1Point, ...]

    @property
    def num_public_inputs(self) -> int:
        """Number of public inputs the circuit expects."""
        return len(self.ic) - 1


def decode_public_inputs(data: bytes) -> list[int]:
    """
    Split concatenated 32-byte scalars.

    Raises:
        VerifyError: If the length is not a multiple of 32 or a scalar is not canonical.
    """
    if len(data) % 32 != 0:
        raise VerifyError(f"Public inputs length {len(data)} is not a multiple of 32")

    scalars = []
    for offset in range(0, len(data), 32):
        value = int.from_bytes(data[offset : offset + 32], "big")
        if value >= bn128.curve_order:
            raise VerifyError(f"Public input {offset // 32} is not a scalar-field element")
        scalars.append(value)
    return scalars


class Groth16Verifier:
    """A `ProofVerifier` bound to one verifying key."""

    def __init__(self, vk: VerifyingKey) -> None:
        self.vk = vk

    def _accumulate_inputs(self, inputs: Sequence[int]) -> G1Point:
        vk_x = self.vk.ic[0]
        for scalar, point in zip(inputs, self.vk.ic[1:], strict=True):
            vk_x = add(vk_x, mult(point, scalar))
        return vk_x

    def verify(self, public_inputs: bytes, proof: bytes) -> bool:
        """
        Check a proof against concatenated public inputs.

        Returns:
            Whether the pairing equation holds.

        Raises:
            VerifyError: On malformed proof bytes or public inputs, or if the
                pairing arithmetic rejects a point.
        """
        inputs = decode_public_inputs(public_inputs)
        if len(inputs) != self.vk.num_public_inputs:
            raise VerifyError(
                f"Expected {self.vk.num_public_inputs} public inputs, got {len(inputs)}"
            )
        parsed = Groth16Proof.decode(proof)

        vk_x = self._accumulate_inputs(inputs)

        # e(-A, B) * e(alpha, beta) * e(vk_x, gamma) * e(C, delta) == 1
        pairs = [
            (parsed.b, neg(parsed.a)),
            (self.vk.beta_g2, self.vk.alpha_g1),
            (self.vk.gamma_g2, vk_x),
            (self.vk.delta_g2, parsed.c),
        ]
        product = bn128.FQ12.one()
        try:
            for q, p in pairs:
                # A pairing with the point at infinity is the identity.
                if q is None or p is None:
                    continue
                product = product * pairing(q, p)
        except (ValueError, AssertionError) as e:
            raise VerifyError(f"Pairing failed: {e}") from e

        return product == bn128.FQ12.one()
