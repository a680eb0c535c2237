"""OTP Merkle-membership circuit.

Proves knowledge of an OTP and a LEVELS-deep authentication path such that

    leaf = H(otp, time)
    level_hashes[i + 1] = H(left_i, right_i)
    level_hashes[LEVELS] = root

where (left_i, right_i) is (sibling_i, level_hashes[i]) when path_index[i]
is 0 and (level_hashes[i], sibling_i) when it is 1. Public outputs are
[time, root], in that order.

Every hash uses a fresh sponge (see primitives/poseidon.py). Direction bits
are constrained to {0, 1} before they select the ordering; the selection is
the affine identity bit * a + (1 - bit) * b, never a Python branch.
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from constraints.base import Context, Witness
from constraints.gates import GateChip
from constraints.poseidon_chip import poseidon_hash
from protocol.input import LEVELS, CircuitInput

logger = logging.getLogger(__name__)


def fold_merkle_path(
    ctx: Context,
    gate: GateChip,
    leaf: Witness,
    path_elements: Sequence[Witness],
    path_index: Sequence[Witness],
) -> list[Witness]:
    """Fold a leaf up a fixed-depth path.

    Args:
        ctx: Circuit context
        gate: Gate chip
        leaf: Leaf commitment
        path_elements: LEVELS sibling witnesses
        path_index: LEVELS direction-bit witnesses

    Returns:
        LEVELS + 1 level hashes; [0] is the leaf and [-1] the root
    """
    if len(path_elements) != LEVELS or len(path_index) != LEVELS:
        raise ValueError(
            f"path must have {LEVELS} levels, got {len(path_elements)} siblings "
            f"and {len(path_index)} bits"
        )

    level_hashes = [leaf]
    for i in range(LEVELS):
        bit = path_index[i]
        gate.assert_bit(ctx, bit)

        current, sibling = level_hashes[i], path_elements[i]
        left = gate.select(ctx, current, sibling, bit)
        right = gate.select(ctx, sibling, current, bit)
        level_hashes.append(poseidon_hash(ctx, gate, [left, right]))
    return level_hashes


def otp_merkle_proof(ctx: Context, circuit_input: CircuitInput, make_public: list[Witness]) -> list[Witness]:
    """Build the full circuit into ctx.

    Appends [time, root] to make_public and returns all level hashes.
    """
    gate = GateChip()

    otp = ctx.load_witness(circuit_input.otp)
    time = ctx.load_witness(circuit_input.time)
    path_elements = [ctx.load_witness(x) for x in circuit_input.path_elements]
    path_index = [ctx.load_witness(x) for x in circuit_input.path_index]
    make_public.append(time)

    leaf = poseidon_hash(ctx, gate, [otp, time])
    level_hashes = fold_merkle_path(ctx, gate, leaf, path_elements, path_index)

    root = level_hashes[LEVELS]
    make_public.append(root)
    logger.debug("time: %d, root: %d", time.value, root.value)
    return level_hashes


@dataclass
class CircuitResult:
    """A constructed circuit instance.

    Attributes:
        ctx: Context holding the trace and all constraints
        public_outputs: [time, root]
        level_hashes: Leaf, each intermediate hash, root
    """
    ctx: Context
    public_outputs: list[Witness]
    level_hashes: list[Witness]

    @property
    def public_values(self) -> list[int]:
        return [w.value for w in self.public_outputs]

    @property
    def root(self) -> int:
        return self.public_outputs[1].value


def build_circuit(circuit_input: CircuitInput) -> CircuitResult:
    """Construct the circuit on a fresh Context."""
    ctx = Context()
    make_public: list[Witness] = []
    level_hashes = otp_merkle_proof(ctx, circuit_input, make_public)
    return CircuitResult(ctx=ctx, public_outputs=make_public, level_hashes=level_hashes)
