"""BN254 scalar field GF(r) and decimal-string codec.

Uses galois for field arithmetic on arrays. Hot paths (the Poseidon
permutation, witness generation) work on plain Python ints reduced modulo
BN254_PRIME, the same way the Poseidon2 reference does for Goldilocks.

FF is constructed with an explicit primitive element: letting galois search
for one would require factoring r - 1.
"""

import galois

# --- Field Construction ---

BN254_PRIME = 21888242871839275222246405745257275088548364400416034343698204186575808495617

FF = galois.GF(BN254_PRIME, primitive_element=5, verify=False)
"""Scalar field of BN254."""

# Bit length of the modulus (254)
FIELD_BITS = BN254_PRIME.bit_length()


class MalformedFieldElement(ValueError):
    """Raised when a string is not a valid decimal field-element encoding."""


# --- Codec ---

_DIGIT_CHUNK = 4000


def parse_field_element(s: str) -> int:
    """Decode a base-10 string into a field element.

    Accepts only ASCII digits with no sign, whitespace or redundant leading
    zero. The value is reduced modulo BN254_PRIME.

    Args:
        s: Decimal representation

    Returns:
        Integer in [0, BN254_PRIME)

    Raises:
        MalformedFieldElement: If s is not a valid encoding
    """
    if not isinstance(s, str):
        raise MalformedFieldElement(f"expected a decimal string, got {type(s).__name__}")
    if not s:
        raise MalformedFieldElement("empty field element")
    if not (s.isascii() and s.isdigit()):
        raise MalformedFieldElement(f"not a base-10 integer: {s!r}")
    if len(s) > 1 and s[0] == "0":
        raise MalformedFieldElement(f"leading zero in field element: {s!r}")

    # Horner over chunks keeps int() under the interpreter's digit limit
    value = 0
    for i in range(0, len(s), _DIGIT_CHUNK):
        chunk = s[i:i + _DIGIT_CHUNK]
        value = (value * 10 ** len(chunk) + int(chunk)) % BN254_PRIME
    return value


def format_field_element(x: int) -> str:
    """Encode a field element as its canonical decimal string."""
    return str(int(x) % BN254_PRIME)


def to_field(x: int) -> int:
    """Reduce an integer into [0, BN254_PRIME)."""
    return int(x) % BN254_PRIME
