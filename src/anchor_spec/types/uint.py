"""Unsigned integer types with range checks and pydantic integration."""

from __future__ import annotations

from typing import Any, ClassVar, Literal, SupportsIndex, SupportsInt

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema
from typing_extensions import Self


class BaseUint(int):
    """
    A base class for fixed-width unsigned integers.

    Instances are plain `int` subclasses: arithmetic returns `int`, so range
    checks happen only where a value is stored back into a typed field.
    """

    BITS: ClassVar[int]
    """The number of bits in the integer (overridden by subclasses)."""

    def __new__(cls, value: SupportsInt) -> Self:
        """
        Create and validate a new instance.

        Raises:
            TypeError: If `value` is a bool (ambiguous in amounts and indices).
            OverflowError: If `value` is outside `[0, 2**BITS - 1]`.
        """
        if isinstance(value, bool):
            raise TypeError(f"{cls.__name__} does not accept bool values")
        int_value = int(value)
        if not (0 <= int_value < (2**cls.BITS)):
            raise OverflowError(f"{int_value} is out of range for {cls.__name__}")
        return super().__new__(cls, int_value)

    @classmethod
    def max_value(cls) -> int:
        """The largest representable value."""
        return 2**cls.BITS - 1

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Hook into Pydantic's validation system."""

        def validate(value: Any) -> BaseUint:
            try:
                return cls(value)
            except (OverflowError, TypeError) as e:
                raise ValueError(str(e)) from e

        return core_schema.json_or_python_schema(
            json_schema=core_schema.int_schema(ge=0, lt=2**cls.BITS),
            python_schema=core_schema.plain_validator_function(validate),  # type: ignore[operator]
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda instance: int(instance)
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, core_schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        """Annotate the JSON schema with the integer width."""
        json_schema = handler(core_schema)
        json_schema.update(format=f"uint{cls.BITS}")
        return json_schema

    def to_bytes(
        self,
        length: SupportsIndex | None = None,
        byteorder: Literal["little", "big"] = "big",
        *,
        signed: bool = False,
    ) -> bytes:
        """
        Return an array of bytes representing the integer.

        Defaults to big-endian and the type's natural byte length, the layout
        used for every integer that enters a hash or a public input.
        """
        actual_length = self.BITS // 8 if length is None else int(length)
        return super().to_bytes(length=actual_length, byteorder=byteorder, signed=signed)

    def __repr__(self) -> str:
        """Return a string representation of the integer."""
        return f"{type(self).__name__}({int(self)})"


class Uint16(BaseUint):
    """A 16-bit unsigned integer."""

    BITS = 16


class Uint32(BaseUint):
    """A 32-bit unsigned integer (leaf indices, tree levels)."""

    BITS = 32


class Uint64(BaseUint):
    """A 64-bit unsigned integer (chain ids, nonces)."""

    BITS = 64


class Uint128(BaseUint):
    """A 128-bit unsigned integer (balances, fees, limits)."""

    BITS = 128
