"""
Poseidon hash over the BN254 scalar field (width 3, rate 2).

This module is the off-circuit side of the hash: parameter generation, the
reference permutation and the sponge used by anyone checking a root. The
in-circuit chip (constraints/poseidon_chip.py) reads the same PoseidonSpec
and must stay bit-identical to this file.

Parameters are produced by the Grain LFSR procedure of the Poseidon reference
parameter script (prime field, x^5 S-box, n = 254): round constants are
rejection-sampled, then the Cauchy MDS matrix is drawn from the same stream.
"""

from collections import deque
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Sequence

from primitives.field import BN254_PRIME, FIELD_BITS

# --- Parameters ---

T = 3
RATE = 2
R_F = 8
R_P = 57
ALPHA = 5


@dataclass(frozen=True)
class PoseidonSpec:
    """Permutation parameters shared by the reference hash and the chip.

    Attributes:
        t: State width
        rate: Absorbing rate (cells 0..rate-1)
        r_f: Number of full rounds (split evenly before/after partial rounds)
        r_p: Number of partial rounds
        round_constants: (r_f + r_p) * t constants, round-major
        mds: t x t MDS matrix, row-major
    """

    t: int
    rate: int
    r_f: int
    r_p: int
    round_constants: tuple[int, ...]
    mds: tuple[tuple[int, ...], ...]

    @property
    def n_rounds(self) -> int:
        return self.r_f + self.r_p

    def is_full_round(self, r: int) -> bool:
        """Full rounds are the first and last r_f/2 rounds."""
        half = self.r_f // 2
        return r < half or r >= half + self.r_p

    def round_constants_at(self, r: int) -> tuple[int, ...]:
        return self.round_constants[r * self.t:(r + 1) * self.t]


# --- Grain LFSR ---


class GrainLFSR:
    """80-bit Grain LFSR seeded with the permutation description.

    Seed layout (MSB first): field type (2 bits, 1 = prime field), S-box type
    (4 bits, 0 = x^alpha), field size n (12), t (12), R_F (10), R_P (10),
    then 30 bits set to 1. The first 160 output bits are discarded.
    """

    def __init__(self, field_bits: int, t: int, r_f: int, r_p: int):
        seed = (
            _bits(1, 2)
            + _bits(0, 4)
            + _bits(field_bits, 12)
            + _bits(t, 12)
            + _bits(r_f, 10)
            + _bits(r_p, 10)
            + [1] * 30
        )
        self._state = deque(seed, maxlen=80)
        for _ in range(160):
            self._clock()

    def _clock(self) -> int:
        s = self._state
        bit = s[62] ^ s[51] ^ s[38] ^ s[23] ^ s[13] ^ s[0]
        s.append(bit)
        return bit

    def next_bit(self) -> int:
        """Self-shrinking output: emit the second bit of a pair whose first bit is 1."""
        bit = self._clock()
        while bit == 0:
            self._clock()
            bit = self._clock()
        return self._clock()

    def next_bits(self, n: int) -> int:
        """Read n output bits as a big-endian integer."""
        value = 0
        for _ in range(n):
            value = (value << 1) | self.next_bit()
        return value

    def next_field_element(self) -> int:
        """Rejection-sample an element of [0, BN254_PRIME)."""
        value = self.next_bits(FIELD_BITS)
        while value >= BN254_PRIME:
            value = self.next_bits(FIELD_BITS)
        return value


def _bits(value: int, width: int) -> List[int]:
    return [int(b) for b in format(value, f"0{width}b")]


def _cauchy_mds(grain: GrainLFSR, t: int) -> List[List[int]]:
    """Draw xs, ys (2t distinct, reduced without rejection) and build 1/(x_i + y_j)."""
    while True:
        samples = [grain.next_bits(FIELD_BITS) % BN254_PRIME for _ in range(2 * t)]
        if len(set(samples)) != 2 * t:
            continue
        xs, ys = samples[:t], samples[t:]
        if any((x + y) % BN254_PRIME == 0 for x in xs for y in ys):
            continue
        return [[pow(x + y, -1, BN254_PRIME) for y in ys] for x in xs]


@lru_cache(maxsize=None)
def poseidon_spec(t: int = T, r_f: int = R_F, r_p: int = R_P) -> PoseidonSpec:
    """Return the process-wide parameter table for (t, r_f, r_p).

    Computed once per parameter set and cached; every caller shares the same
    immutable instance.
    """
    grain = GrainLFSR(FIELD_BITS, t, r_f, r_p)
    round_constants = tuple(grain.next_field_element() for _ in range((r_f + r_p) * t))
    mds = tuple(tuple(row) for row in _cauchy_mds(grain, t))
    return PoseidonSpec(
        t=t,
        rate=t - 1,
        r_f=r_f,
        r_p=r_p,
        round_constants=round_constants,
        mds=mds,
    )


# --- Permutation ---


def _sbox(x: int) -> int:
    return pow(x, ALPHA, BN254_PRIME)


def permute(state: Sequence[int], spec: PoseidonSpec | None = None) -> List[int]:
    """
    Apply the Poseidon permutation to a width-t state.

    Each round adds its round constants, applies the S-box (every cell in full
    rounds, cell 0 only in partial rounds), then multiplies by the MDS matrix.

    Args:
        state: t field elements
        spec: Parameters (defaults to the shared width-3 table)

    Returns:
        New list of t field elements
    """
    spec = spec or poseidon_spec()
    if len(state) != spec.t:
        raise ValueError(f"state must have {spec.t} elements, got {len(state)}")

    state = [x % BN254_PRIME for x in state]
    for r in range(spec.n_rounds):
        rc = spec.round_constants_at(r)
        state = [(x + c) % BN254_PRIME for x, c in zip(state, rc)]
        if spec.is_full_round(r):
            state = [_sbox(x) for x in state]
        else:
            state[0] = _sbox(state[0])
        state = [
            sum(m * x for m, x in zip(row, state)) % BN254_PRIME
            for row in spec.mds
        ]
    return state


# --- Sponge ---


class PoseidonSponge:
    """
    Sponge over the width-3 permutation.

    The state starts at zero. absorb() adds up to `rate` elements into the
    first cells, permute() applies the permutation and squeeze() reads cell 0.
    absorb -> permute -> squeeze is one 2-to-1 (or 1-to-1) compression.
    """

    def __init__(self, spec: PoseidonSpec | None = None):
        self.spec = spec or poseidon_spec()
        self.state = [0] * self.spec.t

    def absorb(self, elements: Sequence[int]) -> None:
        if len(elements) > self.spec.rate:
            raise ValueError(f"can absorb at most {self.spec.rate} elements, got {len(elements)}")
        for i, x in enumerate(elements):
            self.state[i] = (self.state[i] + x) % BN254_PRIME

    def permute(self) -> None:
        self.state = permute(self.state, self.spec)

    def squeeze(self) -> int:
        return self.state[0]


def poseidon_hash(*inputs: int) -> int:
    """Compress one or two field elements with a fresh sponge."""
    sponge = PoseidonSponge()
    sponge.absorb(list(inputs))
    sponge.permute()
    return sponge.squeeze()
