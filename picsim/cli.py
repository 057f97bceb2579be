"""Command line entry point that runs a short demonstration program."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from picsim.cpu import CPU
from picsim.opcodes import ADDLW, CLRF, MOVWF

DEFAULT_CYCLES = 3


def build_demo_program() -> list[int]:
    """The demonstration program: ADDLW 0x01, MOVWF 0x20, CLRF 0x20."""
    return [
        (ADDLW << 8) | 0x01,
        (MOVWF << 8) | 0x20,
        (CLRF << 8) | (1 << 7) | 0x20,
    ]


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="picsim", description="Run the demonstration program on the simulator."
    )
    parser.add_argument(
        "--cycles",
        type=int,
        default=DEFAULT_CYCLES,
        help="number of instruction cycles to run (default: %(default)s)",
    )
    args = parser.parse_args(argv)

    cpu = CPU()
    for index, word in enumerate(build_demo_program()):
        cpu.edit_program_memory(0, index, word)

    print("Executing test program...")
    cpu.execute(args.cycles)

    print("Execution finished. Checking register 0x20 in Bank 0:")
    print(cpu.bank_data_info(0))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())