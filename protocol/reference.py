"""Off-circuit fold: what a verifier computes to know which root to expect.

Uses the same fresh-sponge Poseidon compression as the circuit, so for any
honest input compute_root() equals the root the circuit exposes.
"""

from typing import Sequence

from primitives.poseidon import poseidon_hash
from protocol.input import CircuitInput


def leaf_commitment(otp: int, time: int) -> int:
    """Leaf = H(otp, time)."""
    return poseidon_hash(otp, time)


def merkle_parent(current: int, sibling: int, bit: int) -> int:
    """Hash one level: bit 0 -> H(sibling, current), bit 1 -> H(current, sibling)."""
    if bit == 0:
        return poseidon_hash(sibling, current)
    if bit == 1:
        return poseidon_hash(current, sibling)
    raise ValueError(f"direction bit must be 0 or 1, got {bit}")


def fold_path(leaf: int, path_elements: Sequence[int], path_index: Sequence[int]) -> list[int]:
    """Return every level hash from the leaf (index 0) to the root (last)."""
    if len(path_elements) != len(path_index):
        raise ValueError(
            f"Length mismatch: {len(path_elements)} siblings but {len(path_index)} bits"
        )
    level_hashes = [leaf]
    for sibling, bit in zip(path_elements, path_index):
        level_hashes.append(merkle_parent(level_hashes[-1], sibling, bit))
    return level_hashes


def compute_root(circuit_input: CircuitInput) -> int:
    leaf = leaf_commitment(circuit_input.otp, circuit_input.time)
    return fold_path(leaf, circuit_input.path_elements, circuit_input.path_index)[-1]


def expected_public_outputs(circuit_input: CircuitInput) -> list[int]:
    """[time, root] as the circuit must expose them."""
    return [circuit_input.time, compute_root(circuit_input)]
