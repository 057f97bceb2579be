"""Program and data memory of one memory bank."""

from __future__ import annotations

from array import array

from picsim.register import Register

MAX_MEM = 128


class MemoryBank:
    """One bank: 128 program words, 128 data bytes and a map of named registers."""

    __slots__ = ("program_memory", "data_memory", "registers")

    def __init__(self) -> None:
        self.program_memory: array = array("H", bytes(2 * MAX_MEM))
        self.data_memory: bytearray = bytearray(MAX_MEM)
        self.registers: dict[str, Register] = {}

    def clear(self) -> None:
        """Zero all program and data memory; the register map is left alone."""
        for index in range(MAX_MEM):
            self.program_memory[index] = 0
            self.data_memory[index] = 0

    def __repr__(self) -> str:
        return f"MemoryBank(registers={sorted(self.registers)!r})"