"""Tests for public amount encoding and public-input assembly."""

import pytest

from anchor_spec.subspecs.bn254 import P
from anchor_spec.subspecs.linkable import ChainType, chain_id_type_element
from anchor_spec.subspecs.transaction import (
    assemble_public_inputs,
    assemble_withdraw_inputs,
    public_amount,
    truncate_and_pad,
)
from anchor_spec.types import Bytes32
from tests.anchor_spec.helpers import make_bytes32, make_ext_data, make_proof_data


class TestPublicAmount:
    """`ext_amount - fee` in the field."""

    def test_deposit(self) -> None:
        assert public_amount(10, 0) == Bytes32.from_int(10)

    def test_withdrawal_wraps(self) -> None:
        assert public_amount(-10, 0) == Bytes32.from_int(P - 10)

    def test_fee_is_subtracted(self) -> None:
        assert public_amount(10, 3) == Bytes32.from_int(7)
        assert public_amount(0, 3) == Bytes32.from_int(P - 3)


class TestTruncateAndPad:
    """Account ids as public inputs."""

    def test_long_account(self) -> None:
        account = bytes(range(32))
        assert truncate_and_pad(account) == Bytes32(bytes(range(20)) + bytes(12))

    def test_short_account(self) -> None:
        assert truncate_and_pad(b"\x07" * 20) == Bytes32(b"\x07" * 20 + bytes(12))

    def test_too_short(self) -> None:
        with pytest.raises(ValueError, match="at least 20 bytes"):
            truncate_and_pad(b"\x07" * 19)


def test_transaction_inputs_layout() -> None:
    ext_data = make_ext_data(ext_amount=10)
    roots = [make_bytes32(1), make_bytes32(2)]
    nullifiers = [make_bytes32(3), make_bytes32(4)]
    commitments = [make_bytes32(5), make_bytes32(6)]
    proof_data = make_proof_data(roots, ext_data, nullifiers, commitments)

    inputs = assemble_public_inputs(proof_data, 1, ChainType.EVM)

    words = [inputs[i : i + 32] for i in range(0, len(inputs), 32)]
    assert words == [
        proof_data.public_amount,
        proof_data.ext_data_hash,
        *nullifiers,
        *commitments,
        chain_id_type_element(1, ChainType.EVM),
        *roots,
    ]


class TestWithdrawInputs:
    """Fixed-denomination withdrawal inputs."""

    def test_mixer_layout(self) -> None:
        recipient, relayer = b"\x0a" * 32, b"\x0b" * 20
        inputs = assemble_withdraw_inputs(
            make_bytes32(1), recipient, relayer, 5, 6, [make_bytes32(2)]
        )
        assert inputs == b"".join(
            [
                make_bytes32(1),
                make_bytes32(2),
                truncate_and_pad(recipient),
                truncate_and_pad(relayer),
                (5).to_bytes(32, "big"),
                (6).to_bytes(32, "big"),
            ]
        )

    def test_anchor_layout(self) -> None:
        recipient, relayer = b"\x0a" * 32, b"\x0b" * 32
        roots = [make_bytes32(2), make_bytes32(3)]
        inputs = assemble_withdraw_inputs(
            make_bytes32(1), recipient, relayer, 5, 0, roots, chain_id=4
        )
        assert inputs == b"".join(
            [
                make_bytes32(1),
                truncate_and_pad(recipient),
                truncate_and_pad(relayer),
                (5).to_bytes(32, "big"),
                bytes(32),
                chain_id_type_element(4, ChainType.SUBSTRATE),
                *roots,
            ]
        )
