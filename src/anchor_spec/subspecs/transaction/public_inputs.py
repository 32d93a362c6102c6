"""
Public-input assembly.

Every public input is a 32-byte big-endian scalar. The order below is the
order the circuits declare their public signals in.
"""

from __future__ import annotations

from typing import Sequence

from anchor_spec.types import Bytes32

from ..bn254.field import encode_signed
from ..linkable.edge import ChainType, chain_id_type_element
from .proof_data import ProofData


def public_amount(ext_amount: int, fee: int) -> Bytes32:
    """
    Field encoding of `ext_amount - fee`.

    Negative results wrap to `P + (ext_amount - fee)`.
    """
    return encode_signed(ext_amount - fee)


def truncate_and_pad(account: bytes) -> Bytes32:
    """Keep the first 20 bytes of an account id and right-pad with zeros to 32."""
    if len(account) < 20:
        raise ValueError(f"Account id must be at least 20 bytes, got {len(account)}")
    return Bytes32(account[:20] + bytes(12))


def assemble_public_inputs(
    proof_data: ProofData,
    chain_id: int,
    chain_type: ChainType = ChainType.SUBSTRATE,
) -> bytes:
    """
    Concatenate the public inputs of a variable-anchor transaction.

    Layout:
        public_amount ‖ ext_data_hash ‖ input_nullifiers ‖
        output_commitments ‖ chain_id_type ‖ roots
    """
    parts: list[bytes] = [proof_data.public_amount, proof_data.ext_data_hash]
    parts.extend(proof_data.input_nullifiers)
    parts.extend(proof_data.output_commitments)
    parts.append(chain_id_type_element(chain_id, chain_type))
    parts.extend(proof_data.roots)
    return b"".join(bytes(p) for p in parts)


def assemble_withdraw_inputs(
    nullifier_hash: Bytes32,
    recipient: bytes,
    relayer: bytes,
    fee: int,
    refund: int,
    roots: Sequence[Bytes32],
    chain_id: int | None = None,
    chain_type: ChainType = ChainType.SUBSTRATE,
) -> bytes:
    """
    Concatenate the public inputs of a fixed-denomination withdrawal.

    Mixer layout (no `chain_id`):
        nullifier_hash ‖ root ‖ recipient ‖ relayer ‖ fee ‖ refund

    Anchor layout (with `chain_id`):
        nullifier_hash ‖ recipient ‖ relayer ‖ fee ‖ refund ‖ chain_id_type ‖ roots
    """
    account_inputs = [
        truncate_and_pad(recipient),
        truncate_and_pad(relayer),
        Bytes32.from_int(fee),
        Bytes32.from_int(refund),
    ]
    if chain_id is None:
        parts: list[bytes] = [nullifier_hash, *roots, *account_inputs]
    else:
        parts = [
            nullifier_hash,
            *account_inputs,
            chain_id_type_element(chain_id, chain_type),
            *roots,
        ]
    return b"".join(bytes(p) for p in parts)
