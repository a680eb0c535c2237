"""Mock prover: checks a finished Context against its witness assignment.

This is the satisfied/unsatisfied verdict a proving backend would reach,
without producing a proof. Gate identities are evaluated over the whole
advice column at once on galois arrays; copy constraints, fixed cells and
public instances are compared cell by cell.

Usage:
    prover = MockProver(k=17, ctx=ctx, instances=[time, root], public_cells=publics)
    failures = prover.verify()
    assert not failures
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from primitives.field import FF
from .base import GATE_WIDTH, Context, Witness


class NotEnoughRowsAvailable(ValueError):
    """Raised when a circuit does not fit into 2**k rows."""


class ConstraintViolation(AssertionError):
    """Raised by MockProver.assert_satisfied() when any check fails."""


@dataclass(frozen=True)
class VerifyFailure:
    """One failed check.

    Attributes:
        kind: 'gate', 'copy', 'fixed' or 'instance'
        location: Row of the failing gate / cell, or instance index
        detail: Human-readable description
    """
    kind: str
    location: int
    detail: str


class MockProver:
    """Satisfaction checker for one circuit instance."""

    def __init__(
        self,
        k: int,
        ctx: Context,
        instances: Sequence[int] = (),
        public_cells: Sequence[Witness] = (),
    ) -> None:
        """Prepare the check.

        Args:
            k: Circuit size parameter; the trace must fit into 2**k rows
            ctx: Finished circuit context
            instances: Public values claimed by the verifier
            public_cells: Cells the circuit exposes, in the same order

        Raises:
            NotEnoughRowsAvailable: If ctx.num_rows > 2**k
        """
        if ctx.num_rows > 1 << k:
            raise NotEnoughRowsAvailable(
                f"circuit uses {ctx.num_rows} rows, k={k} provides {1 << k}"
            )
        self.k = k
        self.ctx = ctx
        self.instances = [int(x) for x in instances]
        self.public_cells = list(public_cells)

    def verify(self) -> list[VerifyFailure]:
        """Run every check and return the failures (empty when satisfied)."""
        failures = []
        failures.extend(self._check_gates())
        failures.extend(self._check_copies())
        failures.extend(self._check_fixed())
        failures.extend(self._check_instances())
        return failures

    def is_satisfied(self) -> bool:
        return not self.verify()

    def assert_satisfied(self) -> None:
        failures = self.verify()
        if failures:
            shown = "; ".join(f"{f.kind}@{f.location}: {f.detail}" for f in failures[:5])
            more = f" (+{len(failures) - 5} more)" if len(failures) > 5 else ""
            raise ConstraintViolation(f"{len(failures)} constraint(s) not satisfied: {shown}{more}")

    # --- Checks ---

    def _check_gates(self) -> list[VerifyFailure]:
        rows = np.asarray(self.ctx.selectors, dtype=np.int64)
        if rows.size == 0:
            return []
        if rows.max() + GATE_WIDTH > self.ctx.num_rows:
            raise ValueError("gate enabled past the end of the advice column")

        advice = FF(self.ctx.advice)
        a, b, c, d = (advice[rows + i] for i in range(GATE_WIDTH))
        residual = a + b * c - d
        bad = rows[np.flatnonzero(residual.view(np.ndarray) != 0)]
        return [VerifyFailure("gate", int(r), "a + b * c != d") for r in bad]

    def _check_copies(self) -> list[VerifyFailure]:
        advice = self.ctx.advice
        return [
            VerifyFailure("copy", dst, f"cell {src} != cell {dst}")
            for src, dst in self.ctx.copy_constraints
            if advice[src] != advice[dst]
        ]

    def _check_fixed(self) -> list[VerifyFailure]:
        advice = self.ctx.advice
        return [
            VerifyFailure("fixed", row, f"expected constant {value}")
            for row, value in self.ctx.fixed.items()
            if advice[row] != value
        ]

    def _check_instances(self) -> list[VerifyFailure]:
        if len(self.instances) != len(self.public_cells):
            return [VerifyFailure(
                "instance", -1,
                f"{len(self.instances)} instance values for {len(self.public_cells)} public cells",
            )]
        return [
            VerifyFailure("instance", i, f"cell {w.cell} does not match public value")
            for i, (w, expected) in enumerate(zip(self.public_cells, self.instances))
            if self.ctx.advice[w.cell] != expected % FF.order
        ]
