"""The public half of a shielded transaction."""

from typing import List

from anchor_spec.types import Bytes32, StrictBaseModel


class ProofData(StrictBaseModel):
    """
    A proof and the public values it attests to.

    Attributes:
        proof: Opaque proof bytes, interpreted only by the verifier.
        public_amount: `ext_amount - fee` encoded in the scalar field.
        roots: Local root first, then one root per neighbor position.
        input_nullifiers: Nullifiers of the spent notes.
        output_commitments: Commitments of the created notes.
        ext_data_hash: Binding hash of the accompanying `ExtData`.
    """

    proof: bytes
    public_amount: Bytes32
    roots: List[Bytes32]
    input_nullifiers: List[Bytes32]
    output_commitments: List[Bytes32]
    ext_data_hash: Bytes32

    @property
    def shape(self) -> tuple[int, int]:
        """The `(inputs, outputs)` circuit shape."""
        return len(self.input_nullifiers), len(self.output_commitments)
