"""Groth16 proof verification over BN254."""

from .verifier import (
    G1_BYTES,
    G2_BYTES,
    PROOF_BYTES,
    Groth16Proof,
    Groth16Verifier,
    VerifyingKey,
    decode_g1,
    decode_g2,
    decode_public_inputs,
    encode_g1,
    encode_g2,
)

__all__ = [
    "Groth16Proof",
    "Groth16Verifier",
    "VerifyingKey",
    "G1_BYTES",
    "G2_BYTES",
    "PROOF_BYTES",
    "decode_g1",
    "decode_g2",
    "encode_g1",
    "encode_g2",
    "decode_public_inputs",
]
