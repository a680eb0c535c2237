"""Protocol - OTP Merkle-membership circuit, reference fold and mock prover."""

from protocol.input import LEVELS, CircuitInput, MalformedCircuitInput
from protocol.circuit import (
    CircuitResult,
    build_circuit,
    fold_merkle_path,
    otp_merkle_proof,
)
from protocol.reference import (
    compute_root,
    expected_public_outputs,
    fold_path,
    leaf_commitment,
    merkle_parent,
)
from protocol.prover import DEFAULT_K, MockProof, min_k, mock_prove

__all__ = [
    # Input
    "LEVELS",
    "CircuitInput",
    "MalformedCircuitInput",
    # Circuit
    "CircuitResult",
    "build_circuit",
    "fold_merkle_path",
    "otp_merkle_proof",
    # Off-circuit fold
    "leaf_commitment",
    "merkle_parent",
    "fold_path",
    "compute_root",
    "expected_public_outputs",
    # Mock proving
    "DEFAULT_K",
    "MockProof",
    "min_k",
    "mock_prove",
]
