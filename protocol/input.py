"""Circuit input record.

Inputs arrive as decimal strings so that 254-bit values survive any JSON
encoder. Decoding happens once, up front: a malformed field aborts before a
single constraint is built.

    {
        "otp": "12345",
        "time": "3155000",
        "path_elements": ["1234", ...],   # LEVELS siblings
        "path_index": ["1", ...]          # LEVELS direction bits
    }
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from primitives.field import BN254_PRIME, format_field_element, parse_field_element

# Valid for 100 years at a 30-second TOTP interval:
# ceil(log2(100 * 365 * 24 * 60 * 2)) = ceil(log2(105120000)) = 27
LEVELS = 27


class MalformedCircuitInput(ValueError):
    """Raised when an input record is missing fields or has wrong path lengths."""


@dataclass(frozen=True)
class CircuitInput:
    """Decoded prover input for one proof instance.

    Attributes:
        otp: Secret one-time password
        time: Timestamp bound into the leaf; exposed as public output 0
        path_elements: LEVELS sibling hashes, leaf level first
        path_index: LEVELS direction bits (1 = current hash is the left input)
    """
    otp: int
    time: int
    path_elements: tuple[int, ...]
    path_index: tuple[int, ...]

    def __post_init__(self) -> None:
        for name in ("path_elements", "path_index"):
            n = len(getattr(self, name))
            if n != LEVELS:
                raise MalformedCircuitInput(f"{name} must have {LEVELS} entries, got {n}")

        # values must already be reduced: the circuit and the reference fold read them as-is
        fields = [("otp", self.otp), ("time", self.time)]
        fields += [("path_elements", x) for x in self.path_elements]
        fields += [("path_index", x) for x in self.path_index]
        for name, x in fields:
            if not 0 <= x < BN254_PRIME:
                raise MalformedCircuitInput(f"{name} value {x} is not in [0, BN254_PRIME)")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CircuitInput":
        """Decode a string-encoded record.

        Raises:
            MalformedCircuitInput: On missing keys or wrong path lengths
            MalformedFieldElement: On any field that is not a valid encoding
        """
        missing = [k for k in ("otp", "time", "path_elements", "path_index") if k not in data]
        if missing:
            raise MalformedCircuitInput(f"missing input fields: {', '.join(missing)}")

        for key in ("path_elements", "path_index"):
            if not isinstance(data[key], list):
                raise MalformedCircuitInput(
                    f"{key} must be a list of strings, got {type(data[key]).__name__}"
                )

        return cls(
            otp=parse_field_element(data["otp"]),
            time=parse_field_element(data["time"]),
            path_elements=tuple(parse_field_element(x) for x in data["path_elements"]),
            path_index=tuple(parse_field_element(x) for x in data["path_index"]),
        )

    @classmethod
    def from_json(cls, text: str) -> "CircuitInput":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedCircuitInput(f"invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise MalformedCircuitInput("input must be a JSON object")
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: str | Path) -> "CircuitInput":
        with open(path) as f:
            return cls.from_json(f.read())

    def to_dict(self) -> dict[str, Any]:
        """Re-encode as decimal strings."""
        return {
            "otp": format_field_element(self.otp),
            "time": format_field_element(self.time),
            "path_elements": [format_field_element(x) for x in self.path_elements],
            "path_index": [format_field_element(x) for x in self.path_index],
        }
