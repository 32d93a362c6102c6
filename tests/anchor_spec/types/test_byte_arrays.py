"""Tests for fixed-length byte types."""

from typing import Any

import pytest
from pydantic import ValidationError

from anchor_spec.types import (
    ZERO_HASH,
    BaseBytes,
    Bytes8,
    Bytes20,
    Bytes32,
    StrictBaseModel,
)


class _Record(StrictBaseModel):
    root: Bytes32


def test_bytes_inheritance_ok() -> None:
    assert issubclass(Bytes32, BaseBytes)
    assert Bytes32.LENGTH == 32
    v = Bytes32(b"\x00" * 32)
    assert isinstance(v, Bytes32)
    assert isinstance(v, bytes)
    assert len(v) == 32


@pytest.mark.parametrize(
    "value,expected",
    [
        (b"\x00\x01\x02\x03\x04\x05\x06\x07", bytes(range(8))),
        (bytearray(range(8)), bytes(range(8))),
        (list(range(8)), bytes(range(8))),
        ("0001020304050607", bytes(range(8))),
        ("0x0001020304050607", bytes(range(8))),
    ],
)
def test_coercion(value: Any, expected: bytes) -> None:
    assert bytes(Bytes8(value)) == expected


@pytest.mark.parametrize("length", [0, 19, 21, 32])
def test_wrong_length_rejected(length: int) -> None:
    with pytest.raises(ValueError, match="Bytes20 expects exactly 20 bytes"):
        Bytes20(b"\x01" * length)


def test_int_round_trip() -> None:
    v = Bytes32.from_int(0x1234)
    assert v[-2:] == b"\x12\x34"
    assert v[:30] == bytes(30)
    assert v.to_int() == 0x1234


def test_from_int_overflow() -> None:
    with pytest.raises(OverflowError):
        Bytes8.from_int(2**64)
    with pytest.raises(OverflowError):
        Bytes8.from_int(-1)


def test_zero() -> None:
    assert Bytes32.zero() == ZERO_HASH
    assert ZERO_HASH.is_zero()
    assert not Bytes32.from_int(1).is_zero()


def test_repr_and_hex() -> None:
    v = Bytes8.from_int(255)
    assert v.hex() == "00000000000000ff"
    assert repr(v) == "Bytes8(00000000000000ff)"


def test_hash_distinguishes_types() -> None:
    assert hash(Bytes8(bytes(8))) != hash(Bytes32(bytes(32)))
    assert len({Bytes32.from_int(1), Bytes32.from_int(1), Bytes32.from_int(2)}) == 2


class TestPydanticIntegration:
    """Byte types as fields of strict models."""

    def test_accepts_instance_and_raw_bytes(self) -> None:
        root = Bytes32.from_int(7)
        assert _Record(root=root).root == root
        assert isinstance(_Record(root=bytes(root)).root, Bytes32)

    def test_rejects_wrong_length(self) -> None:
        with pytest.raises(ValidationError):
            _Record(root=b"\x01" * 31)

    def test_rejects_str_in_strict_mode(self) -> None:
        with pytest.raises(ValidationError):
            _Record(root="00" * 32)  # type: ignore[arg-type]

    def test_serializes_to_hex(self) -> None:
        record = _Record(root=Bytes32.from_int(1))
        assert record.model_dump(mode="json") == {"root": "00" * 31 + "01"}

    def test_frozen(self) -> None:
        record = _Record(root=Bytes32.zero())
        with pytest.raises(ValidationError):
            record.root = Bytes32.from_int(1)  # type: ignore[misc]
