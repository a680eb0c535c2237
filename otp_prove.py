#!/usr/bin/env python3
"""
Command-line driver for the OTP Merkle-membership circuit.

    python otp_prove.py mock --input data/otp_merkle.in -k 17
    python otp_prove.py root --input data/otp_merkle.in

`mock` builds the circuit and runs the mock prover, optionally against a
claimed root; `root` computes the expected public outputs off-circuit.
Both print a JSON object with decimal-string values.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from primitives.field import format_field_element, parse_field_element
from protocol.input import CircuitInput
from protocol.prover import DEFAULT_K, mock_prove
from protocol.reference import expected_public_outputs

logger = logging.getLogger("otp_prove")


def cmd_mock(args: argparse.Namespace) -> int:
    circuit_input = CircuitInput.from_file(args.input)

    instances = None
    if args.root is not None:
        instances = [circuit_input.time, parse_field_element(args.root)]

    proof = mock_prove(circuit_input, k=args.k, instances=instances)
    print(json.dumps({
        "satisfied": proof.satisfied,
        "k": proof.k,
        "rows": proof.rows,
        "public_outputs": {
            "time": format_field_element(proof.public_values[0]),
            "root": format_field_element(proof.public_values[1]),
        },
    }, indent=2))

    for failure in proof.failures[:10]:
        logger.error("%s check failed at %d: %s", failure.kind, failure.location, failure.detail)
    return 0 if proof.satisfied else 1


def cmd_root(args: argparse.Namespace) -> int:
    circuit_input = CircuitInput.from_file(args.input)
    time, root = expected_public_outputs(circuit_input)
    print(json.dumps({
        "time": format_field_element(time),
        "root": format_field_element(root),
    }, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Prove OTP membership in a Poseidon Merkle tree (mock prover)'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )
    sub = parser.add_subparsers(dest='command', required=True)

    mock = sub.add_parser('mock', help='Build the circuit and run the mock prover')
    mock.add_argument(
        '--input',
        type=Path,
        required=True,
        help='Path to circuit input JSON'
    )
    mock.add_argument(
        '-k',
        type=int,
        default=DEFAULT_K,
        help=f'Circuit size parameter, 2^k rows (default {DEFAULT_K})'
    )
    mock.add_argument(
        '--root',
        type=str,
        default=None,
        help='Claimed root (decimal) to check the proof against'
    )
    mock.set_defaults(func=cmd_mock)

    root = sub.add_parser('root', help='Compute the public outputs off-circuit')
    root.add_argument(
        '--input',
        type=Path,
        required=True,
        help='Path to circuit input JSON'
    )
    root.set_defaults(func=cmd_root)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    if not args.input.exists():
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        return 1
    try:
        return args.func(args)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
