"""Instruction opcodes and the instruction decoder."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

# Byte-oriented file register operations
ADDWF = 0b00000111
ANDWF = 0b00000101
CLRF = 0b00000001
COMF = 0b00001001
DECF = 0b00000011
DECFSZ = 0b00001011
INCF = 0b00001010
INCFSZ = 0b00001111
IORWF = 0b00000100
MOVF = 0b00001000
MOVWF = 0b00000000
RLF = 0b00001101
RRF = 0b00001100

# Bit-oriented file register operations
BCF = 0b0100
BSF = 0b0101
BTFSC = 0b0110
BTFSS = 0b0111

# Literal and control operations
ADDLW = 0b00111110
ANDLW = 0b00111001
CALL = 0b1000
GOTO = 0b1001
IORLW = 0b00111000
MOVLW = 0b00110000
RETLW = 0b00110100
SUBLW = 0b00111100
XORLW = 0b00111010

INSTRUCTION_MASK = 0xFFFF


class DecodeError(ValueError):
    """Raised when an instruction word matches no instruction family."""


class InstructionType(IntEnum):
    BYTE = 0
    BIT = 1
    LITERAL = 2


@dataclass(frozen=True)
class DecodedInstruction:
    """A decoded instruction word.

    ``operand`` is the file address (with the destination bit for byte
    operations) or the 8-bit literal; ``bit`` is only set for bit operations.
    """

    kind: InstructionType
    opcode: int
    operand: int
    bit: int | None = None

    @property
    def parts(self) -> tuple[int, ...]:
        """The decoded fields in order, ending with the instruction type."""
        if self.bit is None:
            return (self.opcode, self.operand, int(self.kind))
        return (self.opcode, self.operand, self.bit, int(self.kind))


def decode_instruction(instruction: int) -> DecodedInstruction:
    """Split a 16-bit instruction word into its type, opcode and operands."""
    if not 0 <= instruction <= INSTRUCTION_MASK:
        raise ValueError(f"instruction word out of range: {instruction:#x}")

    family = instruction & 0xF000
    if instruction & 0xC000 == 0:
        return DecodedInstruction(
            kind=InstructionType.BYTE,
            opcode=(instruction >> 8) & 0xFF,
            operand=instruction & 0xFF,
        )
    if family in (0x4000, 0x5000, 0x6000, 0x7000):
        return DecodedInstruction(
            kind=InstructionType.BIT,
            opcode=(instruction >> 10) & 0xFF,
            operand=instruction & 0x7F,
            bit=(instruction >> 7) & 0b111,
        )
    if instruction & 0xC000 == 0x8000 or family == 0xC000:
        return DecodedInstruction(
            kind=InstructionType.LITERAL,
            opcode=(instruction >> 8) & 0xFF,
            operand=instruction & 0xFF,
        )
    raise DecodeError(f"instruction is not decoded properly: {instruction:#x}")