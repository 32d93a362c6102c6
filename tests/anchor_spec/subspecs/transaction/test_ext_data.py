"""Tests for ext data encoding and its hash binding."""

import pytest
from Crypto.Hash import keccak
from pydantic import ValidationError

from anchor_spec.subspecs.bn254 import P
from anchor_spec.subspecs.transaction import ExtData, KeccakBindHasher, ext_data_hash
from anchor_spec.types import Bytes32, Uint128
from tests.anchor_spec.helpers import make_account, make_ext_data


class TestEncoding:
    """The byte layout hashed by the binding."""

    def test_layout(self) -> None:
        ext_data = ExtData(
            recipient=b"\x01" * 20,
            relayer=b"\x02" * 32,
            ext_amount=-5,
            fee=Uint128(3),
            encrypted_output1=b"ab",
            encrypted_output2=b"",
        )
        expected = (
            (20).to_bytes(4, "big")
            + b"\x01" * 20
            + (32).to_bytes(4, "big")
            + b"\x02" * 32
            + (-5).to_bytes(32, "big", signed=True)
            + (3).to_bytes(32, "big")
            + (2).to_bytes(4, "big")
            + b"ab"
            + (0).to_bytes(4, "big")
        )
        assert ext_data.encode() == expected

    def test_negative_amount_is_twos_complement(self) -> None:
        encoded = make_ext_data(ext_amount=-1).encode()
        offset = 4 + 32 + 4 + 32
        assert encoded[offset : offset + 32] == b"\xff" * 32

    def test_every_field_affects_encoding(self) -> None:
        base = make_ext_data(ext_amount=10, fee=1)
        variants = [
            make_ext_data(ext_amount=11, fee=1),
            make_ext_data(ext_amount=10, fee=2),
            make_ext_data(ext_amount=10, fee=1, recipient=make_account(9)),
            make_ext_data(ext_amount=10, fee=1, relayer=make_account(9)),
            base.model_copy(update={"encrypted_output1": b"other"}),
            base.model_copy(update={"encrypted_output2": b"other"}),
        ]
        encodings = {variant.encode() for variant in variants}
        assert base.encode() not in encodings
        assert len(encodings) == len(variants)


class TestValidation:
    """Field constraints."""

    def test_account_length(self) -> None:
        with pytest.raises(ValidationError):
            make_ext_data(recipient=b"\x01" * 19)
        with pytest.raises(ValidationError):
            make_ext_data(relayer=b"\x01" * 33)

    def test_ext_amount_range(self) -> None:
        make_ext_data(ext_amount=-(2**127))
        make_ext_data(ext_amount=2**127 - 1)
        with pytest.raises(ValidationError):
            make_ext_data(ext_amount=2**127)

    def test_fee_is_unsigned(self) -> None:
        with pytest.raises(ValidationError):
            ExtData(
                recipient=make_account(1),
                relayer=make_account(2),
                ext_amount=0,
                fee=-1,  # type: ignore[arg-type]
            )


class TestHash:
    """The binding hash."""

    def test_keccak_reduced_modulo_p(self) -> None:
        ext_data = make_ext_data(ext_amount=10)
        digest = keccak.new(digest_bits=256, data=ext_data.encode()).digest()
        assert ext_data_hash(ext_data).to_int() == int.from_bytes(digest, "big") % P

    def test_default_hasher(self) -> None:
        ext_data = make_ext_data(ext_amount=10)
        assert ext_data_hash(ext_data) == KeccakBindHasher().hash(ext_data.encode())

    def test_custom_hasher(self) -> None:
        class ConstantHasher:
            def hash(self, data: bytes) -> Bytes32:
                return Bytes32.from_int(len(data))

        ext_data = make_ext_data()
        assert ext_data_hash(ext_data, ConstantHasher()).to_int() == len(ext_data.encode())
