"""Arithmetic instructions built from the single a + b * c = d gate.

Every instruction assigns a small region and enables the gate on it, so the
returned Witness is provably related to its inputs. Branching on a witness is
never done in Python: select() compiles "sel ? a : b" to the affine identity
sel * (a - b) + b.
"""

from typing import Sequence

from primitives.field import BN254_PRIME
from .base import Cell, Constant, Context, Witness, cell_value


class GateChip:
    """Instruction set over a Context."""

    def add(self, ctx: Context, a: Cell, b: Cell) -> Witness:
        """a + b, laid out as | a | b | 1 | a + b |."""
        out = (cell_value(a) + cell_value(b)) % BN254_PRIME
        return ctx.assign_region_last([a, b, Constant(1), out], [0])

    def sub(self, ctx: Context, a: Cell, b: Cell) -> Witness:
        """a - b, laid out as | a - b | b | 1 | a |."""
        out = (cell_value(a) - cell_value(b)) % BN254_PRIME
        return ctx.assign_region([out, b, Constant(1), a], [0])[0]

    def neg(self, ctx: Context, a: Cell) -> Witness:
        """-a, laid out as | a | -a | 1 | 0 |."""
        out = (-cell_value(a)) % BN254_PRIME
        return ctx.assign_region([a, out, Constant(1), Constant(0)], [0])[1]

    def mul(self, ctx: Context, a: Cell, b: Cell) -> Witness:
        """a * b, laid out as | 0 | a | b | a * b |."""
        out = (cell_value(a) * cell_value(b)) % BN254_PRIME
        return ctx.assign_region_last([Constant(0), a, b, out], [0])

    def mul_add(self, ctx: Context, a: Cell, b: Cell, c: Cell) -> Witness:
        """a * b + c, laid out as | c | a | b | a * b + c |."""
        out = (cell_value(a) * cell_value(b) + cell_value(c)) % BN254_PRIME
        return ctx.assign_region_last([c, a, b, out], [0])

    def inner_product(self, ctx: Context, a: Sequence[Cell], b: Sequence[Cell]) -> Witness:
        """sum(a[i] * b[i]) as one chain of overlapping gates.

        Layout: | 0 | a0 | b0 | acc1 | a1 | b1 | acc2 | ... with the gate
        enabled every third row, so each accumulator is the first cell of the
        next gate.
        """
        if len(a) != len(b):
            raise ValueError(f"inner_product length mismatch: {len(a)} vs {len(b)}")
        if not a:
            return ctx.load_zero()

        cells: list[Cell] = [Constant(0)]
        acc = 0
        for x, y in zip(a, b):
            acc = (acc + cell_value(x) * cell_value(y)) % BN254_PRIME
            cells.extend([x, y, acc])
        return ctx.assign_region_last(cells, [3 * i for i in range(len(a))])

    def select(self, ctx: Context, a: Cell, b: Cell, sel: Cell) -> Witness:
        """sel * a + (1 - sel) * b.

        Only meaningful when sel is constrained to a bit.
        """
        diff = self.sub(ctx, a, b)
        return self.mul_add(ctx, sel, diff, b)

    def assert_bit(self, ctx: Context, x: Witness) -> None:
        """Constrain x * x = x, i.e. x * (x - 1) = 0."""
        ctx.assign_region([Constant(0), x, x, x], [0])

    def assert_equal(self, ctx: Context, a: Witness, b: Witness) -> None:
        ctx.constrain_equal(a, b)

    def assert_is_const(self, ctx: Context, a: Witness, constant: int) -> None:
        ctx.constrain_equal(a, ctx.load_constant(constant))
