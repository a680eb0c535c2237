"""Tests for circuit input decoding."""

import dataclasses
import json

import pytest

from primitives.field import BN254_PRIME, MalformedFieldElement
from protocol.input import LEVELS, CircuitInput, MalformedCircuitInput
from tests.conftest import DATA_DIR, SCENARIO_BITS


def test_from_dict(scenario_record) -> None:
    circuit_input = CircuitInput.from_dict(scenario_record)
    assert circuit_input.otp == 12345
    assert circuit_input.time == 3155000
    assert circuit_input.path_elements[:8] == (1234, 11234, 12222, 118865, 435676, 494999, 4837377, 1234)
    assert circuit_input.path_elements[-1] == 494999
    assert list(circuit_input.path_index) == SCENARIO_BITS


def test_round_trip_through_dict(scenario_record) -> None:
    assert CircuitInput.from_dict(scenario_record).to_dict() == scenario_record


def test_from_json(scenario_record) -> None:
    text = json.dumps(scenario_record)
    assert CircuitInput.from_json(text) == CircuitInput.from_dict(scenario_record)


def test_from_file_matches_scenario(scenario_record) -> None:
    """data/otp_merkle.in holds the reference scenario."""
    assert CircuitInput.from_file(DATA_DIR / "otp_merkle.in") == CircuitInput.from_dict(scenario_record)


def test_large_values_survive(scenario_record) -> None:
    scenario_record["time"] = str(BN254_PRIME - 1)
    assert CircuitInput.from_dict(scenario_record).time == BN254_PRIME - 1


@pytest.mark.parametrize("key", ["otp", "time", "path_elements", "path_index"])
def test_missing_field(scenario_record, key: str) -> None:
    del scenario_record[key]
    with pytest.raises(MalformedCircuitInput, match=key):
        CircuitInput.from_dict(scenario_record)


@pytest.mark.parametrize("key", ["path_elements", "path_index"])
@pytest.mark.parametrize("length", [0, LEVELS - 1, LEVELS + 1])
def test_wrong_path_length(scenario_record, key: str, length: int) -> None:
    scenario_record[key] = ["1"] * length
    with pytest.raises(MalformedCircuitInput):
        CircuitInput.from_dict(scenario_record)


def test_path_must_be_list(scenario_record) -> None:
    scenario_record["path_index"] = "1" * LEVELS
    with pytest.raises(MalformedCircuitInput):
        CircuitInput.from_dict(scenario_record)


@pytest.mark.parametrize("key", ["otp", "time"])
def test_malformed_scalar(scenario_record, key: str) -> None:
    scenario_record[key] = "12x"
    with pytest.raises(MalformedFieldElement):
        CircuitInput.from_dict(scenario_record)


def test_malformed_path_entry(scenario_record) -> None:
    scenario_record["path_elements"][5] = "-3"
    with pytest.raises(MalformedFieldElement):
        CircuitInput.from_dict(scenario_record)


def test_numbers_instead_of_strings(scenario_record) -> None:
    scenario_record["otp"] = 12345
    with pytest.raises(MalformedFieldElement):
        CircuitInput.from_dict(scenario_record)


def test_non_boolean_bits_are_accepted_at_decode_time(scenario_record) -> None:
    """Direction bits are only checked by the constraint system."""
    scenario_record["path_index"][0] = "2"
    assert CircuitInput.from_dict(scenario_record).path_index[0] == 2


@pytest.mark.parametrize("text", ["not json", "[1, 2]", "null"])
def test_from_json_rejects_non_objects(text: str) -> None:
    with pytest.raises(MalformedCircuitInput):
        CircuitInput.from_json(text)


def test_direct_construction_checks_depth() -> None:
    with pytest.raises(MalformedCircuitInput):
        CircuitInput(otp=1, time=2, path_elements=(0,) * 3, path_index=(0,) * 3)


@pytest.mark.parametrize("field", ["otp", "time", "path_elements", "path_index"])
@pytest.mark.parametrize("value", [-1, BN254_PRIME, BN254_PRIME + 1])
def test_direct_construction_rejects_unreduced(scenario_input, field: str, value: int) -> None:
    """Both the circuit and the reference fold read values as given."""
    record = dataclasses.asdict(scenario_input)
    if field.startswith("path_"):
        record[field] = (value,) + record[field][1:]
    else:
        record[field] = value
    with pytest.raises(MalformedCircuitInput):
        CircuitInput(**record)
