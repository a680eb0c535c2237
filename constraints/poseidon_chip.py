"""In-circuit Poseidon sponge.

Mirrors primitives.poseidon.PoseidonSponge cell for cell: zero initial state,
absorb into the first `rate` cells, the same round constants and MDS matrix,
squeeze from cell 0. Any divergence between the two makes every proof
unverifiable against roots computed off-circuit.
"""

from typing import Sequence

from primitives.poseidon import PoseidonSpec, poseidon_spec
from .base import Constant, Context, Witness
from .gates import GateChip


class PoseidonChip:
    """Stateful sponge over Witness cells.

    One chip instance is one sponge: state carries over between absorb /
    permute calls. Use hash() for a fresh-sponge compression.
    """

    def __init__(self, ctx: Context, gate: GateChip, spec: PoseidonSpec | None = None):
        self.gate = gate
        self.spec = spec or poseidon_spec()
        self.state: list[Witness] = [ctx.load_zero() for _ in range(self.spec.t)]

    def absorb(self, ctx: Context, elements: Sequence[Witness]) -> None:
        """Add up to `rate` elements into the first state cells."""
        if len(elements) > self.spec.rate:
            raise ValueError(f"can absorb at most {self.spec.rate} elements, got {len(elements)}")
        for i, x in enumerate(elements):
            self.state[i] = self.gate.add(ctx, self.state[i], x)

    def permute(self, ctx: Context) -> None:
        spec = self.spec
        for r in range(spec.n_rounds):
            self._add_round_constants(ctx, spec.round_constants_at(r))
            if spec.is_full_round(r):
                self.state = [self._sbox(ctx, x) for x in self.state]
            else:
                self.state[0] = self._sbox(ctx, self.state[0])
            self._apply_mds(ctx)

    def squeeze(self, ctx: Context) -> Witness:
        return self.state[0]

    def hash(self, ctx: Context, inputs: Sequence[Witness]) -> Witness:
        """absorb -> permute -> squeeze on this sponge."""
        self.absorb(ctx, inputs)
        self.permute(ctx)
        return self.squeeze(ctx)

    # --- Round Components ---

    def _add_round_constants(self, ctx: Context, constants: Sequence[int]) -> None:
        self.state = [
            self.gate.add(ctx, x, Constant(c)) for x, c in zip(self.state, constants)
        ]

    def _sbox(self, ctx: Context, x: Witness) -> Witness:
        """x^5 = (x^2)^2 * x."""
        x2 = self.gate.mul(ctx, x, x)
        x4 = self.gate.mul(ctx, x2, x2)
        return self.gate.mul(ctx, x4, x)

    def _apply_mds(self, ctx: Context) -> None:
        self.state = [
            self.gate.inner_product(ctx, self.state, [Constant(m) for m in row])
            for row in self.spec.mds
        ]


def poseidon_hash(ctx: Context, gate: GateChip, inputs: Sequence[Witness]) -> Witness:
    """Compress one or two witnesses with a fresh sponge."""
    return PoseidonChip(ctx, gate).hash(ctx, inputs)
