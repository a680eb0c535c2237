"""Tests for the otp_prove command-line driver."""

import json

import pytest

import otp_prove
from protocol.input import CircuitInput
from protocol.reference import expected_public_outputs
from tests.conftest import DATA_DIR

INPUT = DATA_DIR / "otp_merkle.in"


@pytest.fixture(scope="module")
def expected():
    time, root = expected_public_outputs(CircuitInput.from_file(INPUT))
    return {"time": str(time), "root": str(root)}


def test_root(capsys, expected) -> None:
    assert otp_prove.main(["root", "--input", str(INPUT)]) == 0
    assert json.loads(capsys.readouterr().out) == expected


def test_mock(capsys, expected) -> None:
    assert otp_prove.main(["mock", "--input", str(INPUT)]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["satisfied"] is True
    assert out["k"] == 17
    assert out["public_outputs"] == expected


def test_mock_wrong_root(capsys, expected) -> None:
    wrong = str(int(expected["root"]) ^ 1)
    assert otp_prove.main(["mock", "--input", str(INPUT), "--root", wrong]) == 1
    assert json.loads(capsys.readouterr().out)["satisfied"] is False


def test_mock_small_k(capsys) -> None:
    assert otp_prove.main(["mock", "--input", str(INPUT), "-k", "8"]) == 1
    assert "rows" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys) -> None:
    assert otp_prove.main(["root", "--input", str(tmp_path / "nope.in")]) == 1
    assert "not found" in capsys.readouterr().err


def test_malformed_input(tmp_path, capsys) -> None:
    path = tmp_path / "bad.in"
    record = json.loads(INPUT.read_text())
    record["otp"] = "0x3039"
    path.write_text(json.dumps(record))
    assert otp_prove.main(["root", "--input", str(path)]) == 1
    assert "Error" in capsys.readouterr().err


def test_requires_command() -> None:
    with pytest.raises(SystemExit):
        otp_prove.main([])


def test_input_is_directory(tmp_path, capsys) -> None:
    assert otp_prove.main(["root", "--input", str(tmp_path)]) == 1
    assert "Error" in capsys.readouterr().err
