"""
Shared fixtures for the circuit tests.

Building the full circuit is the slow part (28 in-circuit permutations), so
the scenario circuit and its mock-prover verdict are built once per module.
"""

import sys
from pathlib import Path

import pytest

# Add the repository root to the path so absolute imports work
# (tests/ is inside the repo root, so parent is the root)
repo_dir = Path(__file__).parent.parent
if str(repo_dir) not in sys.path:
    sys.path.insert(0, str(repo_dir))

from protocol.input import CircuitInput  # noqa: E402

DATA_DIR = repo_dir / "data"

SCENARIO_SIBLINGS = ["1234", "11234", "12222", "118865", "435676", "494999", "4837377"]
SCENARIO_BITS = [1, 1, 0, 1, 0, 1, 0, 1, 1, 0, 1, 0, 1, 0, 1, 1, 0, 1, 0, 1, 0, 1, 1, 0, 1, 0, 1]


def scenario_dict() -> dict:
    """otp=12345, time=3155000, siblings cycled to 27, fixed bit pattern."""
    return {
        "otp": "12345",
        "time": "3155000",
        "path_elements": [SCENARIO_SIBLINGS[i % len(SCENARIO_SIBLINGS)] for i in range(27)],
        "path_index": [str(b) for b in SCENARIO_BITS],
    }


@pytest.fixture
def scenario_record() -> dict:
    return scenario_dict()


@pytest.fixture(scope="module")
def scenario_input() -> CircuitInput:
    return CircuitInput.from_dict(scenario_dict())


@pytest.fixture(scope="module")
def scenario_circuit(scenario_input):
    from protocol.circuit import build_circuit
    return build_circuit(scenario_input)
