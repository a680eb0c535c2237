"""Constraint system: context, gate instructions, Poseidon chip and mock prover.

Circuits are written against GateChip and PoseidonChip on a fresh Context;
MockProver then decides whether the finished trace satisfies every gate,
copy constraint, fixed cell and public instance.
"""

from .base import (
    GATE_WIDTH,
    Cell,
    Constant,
    Context,
    Witness,
    cell_value,
)
from .checker import (
    ConstraintViolation,
    MockProver,
    NotEnoughRowsAvailable,
    VerifyFailure,
)
from .gates import GateChip
from .poseidon_chip import PoseidonChip, poseidon_hash

__all__ = [
    "GATE_WIDTH",
    "Cell",
    "Constant",
    "Context",
    "Witness",
    "cell_value",
    "GateChip",
    "PoseidonChip",
    "poseidon_hash",
    "MockProver",
    "VerifyFailure",
    "ConstraintViolation",
    "NotEnoughRowsAvailable",
]
