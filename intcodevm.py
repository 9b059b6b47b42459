#!/usr/bin/env python3
"""
intcodevm: run an Intcode program from the command line

Usage:
    python intcodevm.py <program.txt | -> [-i 1,2] [--patch 1=12 --patch 2=2]
                        [--max-steps N] [--trace] [--disassemble] [-v]

Prints the produced output values (comma-joined) followed by the word at
address 0. Exit status 3 means the program stopped on IN with no input
left to consume.

Examples:
    python intcodevm.py day02.txt --patch 1=12 --patch 2=2
    python intcodevm.py day05.txt -i 5
    echo "104,1125899906842624,99" | python intcodevm.py -
    python intcodevm.py day09.txt --disassemble
"""

import argparse
import logging
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from intcode_vm import __version__, Computer, Tape, IntcodeError, disassemble
from intcode_vm.config import (
    DEFAULT_MAX_STEPS, EXIT_OK, EXIT_PROGRAM_ERROR, EXIT_INTERNAL_ERROR,
    EXIT_AWAITING_INPUT,
)
from intcode_vm.log_setup import setup_logging


def parse_int_list(value: str) -> list:
    """Parse '1,2,-3' into [1, 2, -3]."""
    try:
        return [int(v) for v in value.split(",") if v.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected comma-separated integers, got {value!r}")


def parse_step_limit(value: str) -> int:
    """Parse a non-negative step budget (0 = unlimited)."""
    try:
        steps = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
    if steps < 0:
        raise argparse.ArgumentTypeError(f"step budget must be >= 0, got {value!r}")
    return steps


def parse_patch(value: str) -> tuple:
    """Parse 'ADDR=VALUE' into (addr, value)."""
    addr, sep, word = value.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected ADDR=VALUE, got {value!r}")
    try:
        return int(addr), int(word)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected ADDR=VALUE, got {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="intcodevm",
        description="Run an Intcode program",
    )
    parser.add_argument("program", help="Program file ('-' reads stdin)")
    parser.add_argument("-i", "--input", action="append", type=parse_int_list,
                        default=[], metavar="VALUES",
                        help="Comma-separated input values (repeatable, consumed in order)")
    parser.add_argument("--patch", action="append", type=parse_patch,
                        default=[], metavar="ADDR=VALUE",
                        help="Write VALUE to ADDR before running (repeatable)")
    parser.add_argument("--max-steps", type=parse_step_limit, default=DEFAULT_MAX_STEPS,
                        help=f"Step budget, 0 for unlimited (default: {DEFAULT_MAX_STEPS})")
    parser.add_argument("--trace", action="store_true",
                        help="Print an instruction trace to stderr after the run")
    parser.add_argument("--disassemble", action="store_true",
                        help="Print a disassembly listing and exit")
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="Increase log verbosity (-v info, -vv debug)")
    parser.add_argument("--log-file", help="Write a full DEBUG log to this file")
    parser.add_argument("--version", action="version",
                        version=f"intcodevm {__version__}")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose >= 2:
        level = logging.DEBUG
    elif args.verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    log = setup_logging(console_level=level, log_file=args.log_file)

    try:
        if args.program == "-":
            tape = Tape.parse(sys.stdin.read())
        else:
            tape = Tape.from_file(args.program)
    except FileNotFoundError:
        print(f"Error: File not found: {args.program}", file=sys.stderr)
        return EXIT_PROGRAM_ERROR
    except IntcodeError as e:
        print(f"Tape error: {e}", file=sys.stderr)
        return EXIT_PROGRAM_ERROR

    if args.disassemble:
        for addr, text in disassemble(tape):
            print(f"{addr:06d}  {text}")
        return EXIT_OK

    comp = Computer(tape)
    comp.enable_trace(args.trace)
    try:
        for addr, value in args.patch:
            comp.write(addr, value)
        for values in args.input:
            comp.add_input(*values)
        result = comp.run(args.max_steps or None)
    except IntcodeError as e:
        print(f"Execution error: {e}", file=sys.stderr)
        log.info("Machine state: %s", comp.display())
        return EXIT_PROGRAM_ERROR
    except Exception as e:
        print(f"Internal error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return EXIT_INTERNAL_ERROR
    finally:
        if args.trace:
            print(comp.get_trace(), file=sys.stderr)

    print(",".join(str(v) for v in comp.output))
    print(result)
    log.info("Stopped: %s", comp.display())

    if comp.awaiting_input:
        print("Program is waiting for more input", file=sys.stderr)
        return EXIT_AWAITING_INPUT
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
