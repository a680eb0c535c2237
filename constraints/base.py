"""Constraint-system context: one advice column with a single custom gate.

The layout follows the PLONKish "flex gate" arithmetization. Every value the
prover knows lives in one advice column; a selector enabled at row i enforces

    a[i] + a[i+1] * a[i+2] - a[i+3] = 0

Cells can be pinned to fixed constants and tied together by copy
constraints. Nothing is checked while a circuit is being built: an
unsatisfiable witness only shows up when constraints/checker.py evaluates
the finished context.

Example:
    ctx = Context()
    x = ctx.load_witness(3)
    # x * x = 9
    ctx.assign_region([Constant(0), x, x, 9], [0])
"""

import itertools
from dataclasses import dataclass
from typing import Sequence, Union

from primitives.field import BN254_PRIME

# Rows spanned by one gate
GATE_WIDTH = 4

_context_ids = itertools.count()


@dataclass(frozen=True)
class Witness:
    """A value bound to an advice cell of one Context.

    Attributes:
        cell: Row index in the advice column
        value: Assigned value in [0, BN254_PRIME)
        context_id: Identifier of the owning Context
    """
    cell: int
    value: int
    context_id: int


@dataclass(frozen=True)
class Constant:
    """A fixed value: the cell it lands in is pinned to it."""
    value: int


# Inputs accepted when assigning a region:
#   Witness  -> copy of an existing cell (adds a copy constraint)
#   Constant -> cell pinned to a fixed value
#   int      -> fresh witness value
Cell = Union[Witness, Constant, int]


def cell_value(cell: Cell) -> int:
    """Value a cell will hold once assigned."""
    if isinstance(cell, (Witness, Constant)):
        return cell.value
    return int(cell) % BN254_PRIME


class Context:
    """Single-threaded trace of one circuit instance.

    The context owns every Witness created through it. Witnesses from another
    context are rejected, so each proof instance needs a fresh Context.
    """

    def __init__(self) -> None:
        self.id = next(_context_ids)
        self.advice: list[int] = []
        self.selectors: list[int] = []
        self.fixed: dict[int, int] = {}
        self.copy_constraints: list[tuple[int, int]] = []

    @property
    def num_rows(self) -> int:
        return len(self.advice)

    # --- Assignment ---

    def assign_cell(self, cell: Cell) -> Witness:
        """Append one advice cell and return it as a Witness."""
        row = len(self.advice)
        if isinstance(cell, Witness):
            self._check_owned(cell)
            self.advice.append(cell.value)
            self.copy_constraints.append((cell.cell, row))
        elif isinstance(cell, Constant):
            value = cell.value % BN254_PRIME
            self.advice.append(value)
            self.fixed[row] = value
        else:
            self.advice.append(int(cell) % BN254_PRIME)
        return Witness(cell=row, value=self.advice[row], context_id=self.id)

    def assign_region(self, cells: Sequence[Cell], gate_offsets: Sequence[int]) -> list[Witness]:
        """Assign consecutive cells and enable the gate at the given offsets.

        Args:
            cells: Cells to place starting at the current row
            gate_offsets: Offsets (relative to the first cell) of rows where
                the gate is enabled; each gate must fit inside the region

        Returns:
            The assigned Witnesses, in order
        """
        for offset in gate_offsets:
            if offset < 0 or offset + GATE_WIDTH > len(cells):
                raise ValueError(
                    f"gate at offset {offset} does not fit in a region of {len(cells)} cells"
                )
        start = len(self.advice)
        assigned = [self.assign_cell(c) for c in cells]
        self.selectors.extend(start + offset for offset in gate_offsets)
        return assigned

    def assign_region_last(self, cells: Sequence[Cell], gate_offsets: Sequence[int]) -> Witness:
        """assign_region() returning only the last cell."""
        return self.assign_region(cells, gate_offsets)[-1]

    def load_witness(self, value: int) -> Witness:
        return self.assign_cell(int(value))

    def load_constant(self, value: int) -> Witness:
        return self.assign_cell(Constant(value))

    def load_zero(self) -> Witness:
        return self.load_constant(0)

    # --- Constraints ---

    def constrain_equal(self, a: Witness, b: Witness) -> None:
        """Add a copy constraint between two existing cells."""
        self._check_owned(a)
        self._check_owned(b)
        self.copy_constraints.append((a.cell, b.cell))

    def _check_owned(self, w: Witness) -> None:
        if w.context_id != self.id:
            raise ValueError(
                f"witness at cell {w.cell} belongs to context {w.context_id}, not {self.id}"
            )
