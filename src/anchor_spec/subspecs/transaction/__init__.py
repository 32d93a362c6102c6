"""Shielded transaction data, public inputs and the validation protocol."""

from .ext_data import BindHasher, ExtData, KeccakBindHasher, ext_data_hash
from .proof_data import ProofData
from .public_inputs import (
    assemble_public_inputs,
    assemble_withdraw_inputs,
    public_amount,
    truncate_and_pad,
)
from .validator import TransactionValidator, ValidatedTransaction
from .verifiers import ProofVerifier, Shape, VerifierRegistry

__all__ = [
    "ExtData",
    "ProofData",
    "BindHasher",
    "KeccakBindHasher",
    "ext_data_hash",
    "public_amount",
    "assemble_public_inputs",
    "assemble_withdraw_inputs",
    "truncate_and_pad",
    "ProofVerifier",
    "VerifierRegistry",
    "Shape",
    "TransactionValidator",
    "ValidatedTransaction",
]
