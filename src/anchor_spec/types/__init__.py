"""Reusable type definitions for the shielded pool."""

from .base import StrictBaseModel
from .byte_arrays import (
    ZERO_HASH,
    BaseBytes,
    Bytes8,
    Bytes20,
    Bytes32,
    FieldElement,
)
from .exceptions import (
    AlreadyRevealedNullifier,
    AuthorizationError,
    CapacityError,
    CollaboratorError,
    EdgeError,
    EdgeListFull,
    EdgeNotFound,
    HashError,
    IncompleteCommitError,
    InvalidDepositAmount,
    InvalidDepositSize,
    InvalidExtAmount,
    InvalidExtData,
    InvalidFeeAmount,
    InvalidMerkleRoots,
    InvalidNonce,
    InvalidPublicAmount,
    InvalidRefundAmount,
    InvalidTxProof,
    InvalidWithdrawAmount,
    PayoutError,
    PoolError,
    StaleOrReplayedEdge,
    TransferError,
    TreeFull,
    Unauthorized,
    UnknownRoot,
    UnmatchedEdges,
    ValidationError,
    VerifyError,
)
from .uint import BaseUint, Uint16, Uint32, Uint64, Uint128

__all__ = [
    # Core types
    "StrictBaseModel",
    "BaseBytes",
    "Bytes8",
    "Bytes20",
    "Bytes32",
    "FieldElement",
    "ZERO_HASH",
    "BaseUint",
    "Uint16",
    "Uint32",
    "Uint64",
    "Uint128",
    # Exceptions
    "PoolError",
    "CapacityError",
    "TreeFull",
    "EdgeListFull",
    "EdgeError",
    "StaleOrReplayedEdge",
    "EdgeNotFound",
    "ValidationError",
    "UnmatchedEdges",
    "UnknownRoot",
    "InvalidMerkleRoots",
    "AlreadyRevealedNullifier",
    "InvalidExtData",
    "InvalidFeeAmount",
    "InvalidExtAmount",
    "InvalidDepositAmount",
    "InvalidWithdrawAmount",
    "InvalidDepositSize",
    "InvalidRefundAmount",
    "InvalidPublicAmount",
    "InvalidTxProof",
    "CollaboratorError",
    "HashError",
    "VerifyError",
    "TransferError",
    "PayoutError",
    "IncompleteCommitError",
    "AuthorizationError",
    "Unauthorized",
    "InvalidNonce",
]
