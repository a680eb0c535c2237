"""Primitives - Field arithmetic and the Poseidon hash."""

from primitives.field import (
    BN254_PRIME,
    FF,
    FIELD_BITS,
    MalformedFieldElement,
    format_field_element,
    parse_field_element,
    to_field,
)
from primitives.poseidon import (
    R_F,
    R_P,
    RATE,
    T,
    PoseidonSpec,
    PoseidonSponge,
    permute,
    poseidon_hash,
    poseidon_spec,
)

__all__ = [
    # Field
    "BN254_PRIME",
    "FF",
    "FIELD_BITS",
    "MalformedFieldElement",
    "parse_field_element",
    "format_field_element",
    "to_field",
    # Poseidon
    "T",
    "RATE",
    "R_F",
    "R_P",
    "PoseidonSpec",
    "PoseidonSponge",
    "permute",
    "poseidon_hash",
    "poseidon_spec",
]
