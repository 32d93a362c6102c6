"""
Deterministic generation of Poseidon round constants and MDS matrices.

Both are drawn from the Grain LFSR in self-shrinking mode, seeded with the
instance description (field type, S-box, field size, width, round counts),
as described in Appendix F of the Poseidon paper
(https://eprint.iacr.org/2019/458).
"""

from collections import deque
from functools import lru_cache
from typing import Iterator, List

from ..bn254.field import P, P_BITS

FULL_ROUNDS = 8
"""Number of full rounds `R_F` (split evenly before and after the partial rounds)."""

PARTIAL_ROUNDS: dict[int, int] = {2: 56, 3: 57, 4: 56, 5: 60, 6: 60}
"""
Number of partial rounds `R_P` per state width for `x^5` over BN254.

These are the 128-bit security counts from the paper's parameter tables.
"""

_FIELD_PRIME = 1
"""Grain seed tag for a prime field."""

_SBOX_POWER = 0
"""Grain seed tag for a power S-box (`x^alpha` with positive alpha)."""


def _seed_bits(width: int, rounds_f: int, rounds_p: int) -> List[int]:
    """The 80-bit initial LFSR state for one Poseidon instance."""
    fields = [
        (_FIELD_PRIME, 2),
        (_SBOX_POWER, 4),
        (P_BITS, 12),
        (width, 12),
        (rounds_f, 10),
        (rounds_p, 10),
    ]
    bits = [int(b) for value, size in fields for b in format(value, f"0{size}b")]
    return bits + [1] * 30


def _grain_bits(width: int, rounds_f: int, rounds_p: int) -> Iterator[int]:
    """
    Yield the self-shrinking Grain bit stream.

    The LFSR is clocked 160 times to discard its warm-up output. After that
    bits are consumed in pairs: a pair whose first bit is 1 emits its second
    bit, other pairs emit nothing.
    """
    state = deque(_seed_bits(width, rounds_f, rounds_p), maxlen=80)

    def clock() -> int:
        bit = state[62] ^ state[51] ^ state[38] ^ state[23] ^ state[13] ^ state[0]
        state.append(bit)
        return bit

    for _ in range(160):
        clock()

    while True:
        first = clock()
        second = clock()
        if first:
            yield second


def _take_int(bits: Iterator[int], count: int) -> int:
    """Read `count` bits, most significant first."""
    value = 0
    for _ in range(count):
        value = (value << 1) | next(bits)
    return value


@lru_cache(maxsize=None)
def generate_parameters(width: int) -> tuple[tuple[int, ...], tuple[tuple[int, ...], ...]]:
    """
    Generate `(round_constants, mds)` for a state of `width` elements.

    Round constants are rejection-sampled below P. The MDS matrix is the
    Cauchy matrix `M[i][j] = 1 / (x_i + y_j)` over `2 * width` distinct
    values drawn from the same stream.

    Raises:
        ValueError: If `width` has no partial-round count.
    """
    if width not in PARTIAL_ROUNDS:
        raise ValueError(f"Unsupported Poseidon width {width}")

    rounds_p = PARTIAL_ROUNDS[width]
    bits = _grain_bits(width, FULL_ROUNDS, rounds_p)

    constants: List[int] = []
    for _ in range((FULL_ROUNDS + rounds_p) * width):
        candidate = _take_int(bits, P_BITS)
        while candidate >= P:
            candidate = _take_int(bits, P_BITS)
        constants.append(candidate)

    while True:
        points = [_take_int(bits, P_BITS) % P for _ in range(2 * width)]
        xs, ys = points[:width], points[width:]
        if len(set(points)) != len(points):
            continue
        if any((x + y) % P == 0 for x in xs for y in ys):
            continue
        mds = tuple(tuple(pow(x + y, P - 2, P) for y in ys) for x in xs)
        return tuple(constants), mds
