"""Mock proving harness.

Builds a circuit instance and hands it to the MockProver together with the
public values a verifier would supply. No real proof is produced; the
outcome is the satisfied/unsatisfied verdict.
"""

import logging
from dataclasses import dataclass, field
from typing import Sequence

from constraints.base import Context
from constraints.checker import MockProver, VerifyFailure
from protocol.circuit import CircuitResult, build_circuit
from protocol.input import CircuitInput

logger = logging.getLogger(__name__)

# 2**17 rows hold the 28 Poseidon permutations plus the per-level gates
DEFAULT_K = 17


def min_k(ctx: Context) -> int:
    """Smallest k with ctx.num_rows <= 2**k."""
    return max(ctx.num_rows - 1, 0).bit_length()


@dataclass
class MockProof:
    """Outcome of a mock proving run.

    Attributes:
        k: Circuit size parameter used
        rows: Advice rows used by the circuit
        public_values: Values the circuit exposes ([time, root])
        instances: Values the check was run against
        failures: Failed checks; empty when satisfied
    """
    k: int
    rows: int
    public_values: list[int]
    instances: list[int]
    failures: list[VerifyFailure] = field(default_factory=list)

    @property
    def satisfied(self) -> bool:
        return not self.failures


def mock_prove(
    circuit_input: CircuitInput,
    k: int = DEFAULT_K,
    instances: Sequence[int] | None = None,
) -> MockProof:
    """Build the circuit and check it.

    Args:
        circuit_input: Decoded prover input
        k: Circuit size parameter
        instances: Public values to check against; defaults to the values
            the circuit itself exposes

    Raises:
        NotEnoughRowsAvailable: If the circuit does not fit into 2**k rows
    """
    result: CircuitResult = build_circuit(circuit_input)
    public_values = result.public_values
    instances = list(public_values if instances is None else instances)

    logger.info("circuit uses %d rows (min k = %d)", result.ctx.num_rows, min_k(result.ctx))
    prover = MockProver(k, result.ctx, instances, result.public_outputs)
    failures = prover.verify()
    if failures:
        logger.info("mock prover found %d failing check(s)", len(failures))

    return MockProof(
        k=k,
        rows=result.ctx.num_rows,
        public_values=public_values,
        instances=instances,
        failures=failures,
    )
