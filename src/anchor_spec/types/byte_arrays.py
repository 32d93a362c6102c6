"""
Fixed-length byte types.

Every hash, root, nullifier and commitment handled by the pool is a
32-byte value. The subclasses here pin the length at the type level so that
a truncated root or an over-long nullifier is rejected at construction time,
long before it reaches the accumulator or the nullifier set.
"""

from __future__ import annotations

from typing import Any, ClassVar, Iterable, SupportsIndex

from pydantic.annotated_handlers import GetCoreSchemaHandler
from pydantic_core import core_schema
from typing_extensions import Self


def _coerce_to_bytes(value: Any) -> bytes:
    """
    Coerce a variety of inputs to raw bytes.

    Accepts:
      - `bytes` / `bytearray`
      - Iterables of integers in [0, 255]
      - Hex strings, with or without a '0x' prefix
    """
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        return bytes.fromhex(value.removeprefix("0x"))
    if isinstance(value, Iterable):
        return bytes(bytearray(value))
    return bytes(value)


class BaseBytes(bytes):
    """
    Base class for fixed-length byte values.

    Subclasses set `LENGTH`, the exact number of bytes an instance holds.
    """

    LENGTH: ClassVar[int]
    """The exact number of bytes (overridden by subclasses)."""

    def __new__(cls, value: Any = b"") -> Self:
        """
        Create and validate a new instance.

        Raises:
            ValueError: If the resulting byte length differs from `LENGTH`.
        """
        if not hasattr(cls, "LENGTH"):
            raise TypeError(f"{cls.__name__} must define LENGTH")

        b = _coerce_to_bytes(value)
        if len(b) != cls.LENGTH:
            raise ValueError(f"{cls.__name__} expects exactly {cls.LENGTH} bytes, got {len(b)}")
        return super().__new__(cls, b)

    @classmethod
    def zero(cls) -> Self:
        """Create an instance filled with zero bytes."""
        return cls(b"\x00" * cls.LENGTH)

    @classmethod
    def from_int(cls, value: int) -> Self:
        """
        Encode a non-negative integer as a big-endian value of `LENGTH` bytes.

        Raises:
            OverflowError: If `value` is negative or does not fit.
        """
        return cls(value.to_bytes(cls.LENGTH, "big"))

    def to_int(self) -> int:
        """Interpret the bytes as a big-endian unsigned integer."""
        return int.from_bytes(self, "big")

    def is_zero(self) -> bool:
        """Whether every byte is zero."""
        return not any(self)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """
        Hook into Pydantic's validation system.

        Instances of the class pass through untouched. Raw bytes of the right
        length are wrapped. Serialization (e.g. to JSON) emits hex.
        """
        from_bytes_validator = core_schema.no_info_plain_validator_function(cls)

        python_schema = core_schema.chain_schema(
            [
                core_schema.bytes_schema(min_length=cls.LENGTH, max_length=cls.LENGTH),
                from_bytes_validator,
            ]
        )

        return core_schema.union_schema(
            [
                core_schema.is_instance_schema(cls),
                python_schema,
            ],
            serialization=core_schema.plain_serializer_function_ser_schema(lambda x: x.hex()),
        )

    def __repr__(self) -> str:
        """Return a string representation of the bytes."""
        return f"{type(self).__name__}({self.hex()})"

    def __hash__(self) -> int:
        """Return the hash of the bytes."""
        return hash((type(self), bytes(self)))

    def hex(self, sep: str | bytes | None = None, bytes_per_sep: SupportsIndex = 1) -> str:
        """Return the hexadecimal string representation of the underlying bytes."""
        return bytes(self).hex() if sep is None else bytes(self).hex(sep, bytes_per_sep)


class Bytes8(BaseBytes):
    """Fixed-size byte array of exactly 8 bytes (encoded chain id types)."""

    LENGTH = 8


class Bytes20(BaseBytes):
    """Fixed-size byte array of exactly 20 bytes (EVM-style account ids)."""

    LENGTH = 20


class Bytes32(BaseBytes):
    """Fixed-size byte array of exactly 32 bytes."""

    LENGTH = 32


FieldElement = Bytes32
"""
A 32-byte scalar-field element.

Interpreted as a big-endian integer. The canonical range is `[0, P)` where
`P` is the BN254 scalar modulus; see `anchor_spec.subspecs.bn254`.
"""

ZERO_HASH: Bytes32 = Bytes32.zero()
"""The zero sentinel. Never a known root, never a valid nullifier."""
