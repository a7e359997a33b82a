#!/usr/bin/env python3
"""
Compute a circom witness from a compiled circuit and an input.json file.

Usage:
    python gen_witness.py circuit.wasm input.json -o witness.json
    python gen_witness.py circuit.cwasm input.json --precompiled -o witness.json
    python gen_witness.py circuit.wasm --precompile-to circuit.cwasm

The witness is written as a JSON array of decimal strings, one per slot.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from guest.wasmtime_guest import WasmtimeModule
from primitives.errors import WitnessError
from protocol.inputs import load_inputs
from protocol.witness_calculator import CalculatorConfig, WitnessCalculator


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description='Compute a circom witness with a sandboxed wasm guest'
    )
    parser.add_argument(
        'circuit',
        type=Path,
        help='Compiled circuit (.wasm, or a serialized artifact with --precompiled)'
    )
    parser.add_argument(
        'input',
        type=Path,
        nargs='?',
        help='Circuit inputs as a JSON object of signal name -> value(s)'
    )
    parser.add_argument(
        '-o', '--output',
        type=Path,
        help='Output path for the witness JSON (default: stdout)'
    )
    parser.add_argument(
        '--precompiled',
        action='store_true',
        help='Treat CIRCUIT as an artifact written by --precompile-to'
    )
    parser.add_argument(
        '--precompile-to',
        type=Path,
        help='Compile CIRCUIT ahead of time, write the artifact here and exit'
    )
    parser.add_argument(
        '--sanity-check',
        action='store_true',
        help='Enable the guest\'s internal consistency assertions'
    )
    parser.add_argument(
        '--fuel',
        type=int,
        help='Abort the guest after consuming this much wasmtime fuel'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log guest lifecycle details'
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s %(name)s: %(message)s',
    )

    if not args.circuit.exists():
        print(f"Error: Circuit file not found: {args.circuit}", file=sys.stderr)
        return 1

    try:
        if args.precompile_to is not None:
            module = WasmtimeModule.from_file(args.circuit, fuel=args.fuel)
            args.precompile_to.write_bytes(module.serialize())
            print(f"Written precompiled module to {args.precompile_to}", file=sys.stderr)
            return 0

        if args.input is None:
            parser.error('input is required unless --precompile-to is given')
        if not args.input.exists():
            print(f"Error: Input file not found: {args.input}", file=sys.stderr)
            return 1

        config = CalculatorConfig(sanity_check=args.sanity_check, fuel=args.fuel)
        calculator = WitnessCalculator.from_file(args.circuit, config, precompiled=args.precompiled)
        witness = calculator.calculate_witness(load_inputs(args.input))
    except WitnessError as e:
        print(f"Error: {type(e).__name__}: {e}", file=sys.stderr)
        return 2

    text = json.dumps([str(w) for w in witness], indent=1)
    if args.output is None:
        print(text)
    else:
        args.output.write_text(text + "\n")
        print(f"Written {len(witness)} witness values to {args.output}", file=sys.stderr)
    return 0


if __name__ == '__main__':
    sys.exit(main())
