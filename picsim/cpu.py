"""The processor core: registers, memory banks, fetch and execute."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType

from picsim.memory import MAX_MEM, MemoryBank
from picsim.opcodes import (
    ADDLW,
    ADDWF,
    ANDLW,
    ANDWF,
    BCF,
    BSF,
    BTFSC,
    BTFSS,
    CALL,
    CLRF,
    GOTO,
    INSTRUCTION_MASK,
    IORLW,
    MOVLW,
    RETLW,
    SUBLW,
    XORLW,
    DecodedInstruction,
    DecodeError,
    InstructionType,
    decode_instruction,
)
from picsim.register import BYTE_MASK, Register

logger = logging.getLogger(__name__)

BANK_COUNT = 4

_REGISTER_NAMES = (
    "AC", "indraddr", "TMR0", "PCL", "STATUS", "FSR",
    "PORTA", "PORTB", "PORTC", "PORTD", "PORTE", "PCLATH", "INTCON",
    "PIR1", "PIR2", "TMR1L", "TM1HL", "T1CON", "TMR2", "T2CON",
    "SSPBUF", "SSPCON", "CCPR1L", "CCPR1H", "CCP1CON", "RCSTA",
    "TXREG", "RCREG", "CCPR2L", "CCPR2H", "CCP2CON", "ADRESH", "ADCON0",
    "OPTION_REG", "TRISA", "TRISB", "TRISC", "TRISD", "TRISE",
    "PIE1", "PIE2", "PCON", "EMPTYREG", "PR2", "SSPADD", "SSPSTAT",
    "TXSTA", "SPBRG", "CMCON", "CVRCON", "ADRESL", "ADCON1",
    "EEDATA", "EEADR", "EEDATH", "EEADRH", "EECON1", "EECON2",
)

# Names under which each bank exposes the shared registers.
_BANK_LAYOUT: tuple[tuple[str, ...], ...] = (
    (
        "indraddr", "TMR0", "PCL", "STATUS", "FSR", "PORTA", "PORTB",
        "PORTC", "PORTD", "PORTE", "PCLATH", "INTCON", "PIR1", "PIR2",
        "TMR1L", "TM1HL", "T1CON", "TMR2", "T2CON", "SSPBUF", "SSPCON",
        "CCPR1L", "CCPR1H", "CCP1CON", "RCSTA", "TXREG", "RCREG",
        "CCPR2L", "CCPR2H", "CCP2CON", "ADRESH", "ADCON0", "AC",
    ),
    (
        "indraddr", "PCL", "STATUS", "FSR", "OPTION_REG", "TRISA", "TRISB",
        "TRISC", "TRISD", "TRISE", "PCLATH", "INTCON", "PIE1", "PIE2",
        "PCON", "PR2", "SSPADD", "SSPSTAT", "TXSTA", "SPBRG", "CMCON",
        "CVRCON", "ADRESL", "ADCON1", "AC", "EMPTYREG1",
    ),
    (
        "indraddr", "TMR0", "PCL", "STATUS", "FSR", "PCLATH", "INTCON",
        "EEDATA", "EEADR", "EEDATH", "EEADRH", "AC", "EMPTYREG_B2_1",
    ),
    (
        "indraddr", "PCL", "STATUS", "FSR", "PCLATH", "INTCON",
        "EECON1", "EECON2", "AC", "EMPTYREG_B3_1",
    ),
)

_ALIASES = {
    "EMPTYREG1": "EMPTYREG",
    "EMPTYREG_B2_1": "EMPTYREG",
    "EMPTYREG_B3_1": "EMPTYREG",
}

_RESET_VALUES = {
    "PCL": 0x00,
    "PCLATH": 0x00,
    "AC": 0x00,
    "STATUS": 0b00011000,
    "FSR": 0x00,
    "PORTA": 0x00,
    "TRISA": 0xFF,
    "PORTB": 0x00,
    "TRISB": 0xFF,
    "PORTC": 0x00,
    "TRISC": 0xFF,
    "PORTD": 0x00,
    "TRISD": 0xFF,
    "PORTE": 0x00,
    "TRISE": 0b00000111,
    "INTCON": 0x00,
}

_LITERAL_OPS: dict[int, Callable[[int, int], int]] = {
    MOVLW: lambda w, k: k,
    ADDLW: lambda w, k: w + k,
    ANDLW: lambda w, k: w & k,
    IORLW: lambda w, k: w | k,
    SUBLW: lambda w, k: k - w,
    XORLW: lambda w, k: w ^ k,
}


class SimulatorError(Exception):
    """Raised for invalid addresses, banks or instructions."""


class CPU:
    """A small mid-range microcontroller core with four memory banks."""

    def __init__(self) -> None:
        self._registers = {name: Register() for name in _REGISTER_NAMES}
        self._banks = tuple(self._build_bank(layout) for layout in _BANK_LAYOUT)
        self.reset()

    def _build_bank(self, layout: tuple[str, ...]) -> MemoryBank:
        bank = MemoryBank()
        bank.registers = {
            key: self._registers[_ALIASES.get(key, key)] for key in layout
        }
        return bank

    @property
    def registers(self) -> Mapping[str, Register]:
        """All core registers by name."""
        return MappingProxyType(self._registers)

    @property
    def banks(self) -> tuple[MemoryBank, ...]:
        return self._banks

    @property
    def ac(self) -> Register:
        """The accumulator (working register)."""
        return self._registers["AC"]

    @property
    def pcl(self) -> Register:
        return self._registers["PCL"]

    @property
    def pclath(self) -> Register:
        return self._registers["PCLATH"]

    @property
    def status(self) -> Register:
        return self._registers["STATUS"]

    def reset(self) -> None:
        """Clear every bank's memories and restore the reset register values."""
        for bank in self._banks:
            bank.clear()
        for name, value in _RESET_VALUES.items():
            self._registers[name].value = value

    def _bank_at(self, bank_no: int) -> MemoryBank:
        if not 0 <= bank_no < len(self._banks):
            raise SimulatorError(f"invalid bank number: {bank_no}")
        return self._banks[bank_no]

    def _resolve_bank(self, bank: MemoryBank | int) -> MemoryBank:
        if isinstance(bank, MemoryBank):
            return bank
        return self._bank_at(bank)

    def bank_data_info(self, bank_no: int) -> str:
        """Return a listing of one bank's data memory, values in hex."""
        bank = self._bank_at(bank_no)
        lines = [f"Data Memory for Bank {bank_no}:"]
        lines.extend(
            f"Addr 0x{address:x}: {value:x}"
            for address, value in enumerate(bank.data_memory)
        )
        return "\n".join(lines)

    def edit_program_memory(self, bank_no: int, index: int, data: int) -> None:
        """Store an instruction word at ``index`` of a bank's program memory."""
        if not 0 <= bank_no < len(self._banks) or not 0 <= index < MAX_MEM:
            raise SimulatorError("invalid address for program memory edit")
        self._banks[bank_no].program_memory[index] = data & INSTRUCTION_MASK

    def set_register_value(self, bank: MemoryBank | int, register_name: str, value: int) -> None:
        """Write a register through the given bank's register map."""
        registers = self._resolve_bank(bank).registers
        if register_name not in registers:
            raise KeyError(f"register {register_name} not found in the bank's map")
        registers[register_name].value = value

    def get_register_value(self, bank: MemoryBank | int, register_name: str) -> int:
        """Read a register through a bank's map; unmapped names read as 0."""
        register = self._resolve_bank(bank).registers.get(register_name)
        return 0 if register is None else register.value

    def fetch(self, cycles: int, bank_no: int) -> tuple[int, int]:
        """Read the word at PCL, advance PCL, and return it with the cycles left."""
        bank = self._bank_at(bank_no)
        address = self.pcl.value
        if address >= MAX_MEM:
            raise SimulatorError(
                f"PCL value {address} exceeds program memory size"
            )
        instruction = bank.program_memory[address]
        self.pcl.value = address + 1
        return instruction, cycles - 1

    def execute(self, cycles: int) -> int:
        """Run instructions until the cycle budget is spent; return what is left."""
        while cycles > 0:
            bank_no = (self.status.value >> 5) & 0b11
            instruction, cycles = self.fetch(cycles, bank_no)
            try:
                decoded = decode_instruction(instruction)
            except DecodeError as exc:
                raise SimulatorError(str(exc)) from exc
            bank = self._banks[bank_no]
            if decoded.kind is InstructionType.BYTE:
                self._execute_byte(bank, decoded)
            elif decoded.kind is InstructionType.BIT:
                cycles = self._execute_bit(bank, bank_no, decoded, cycles)
            else:
                self._execute_literal(decoded)
        return cycles

    def _execute_byte(self, bank: MemoryBank, decoded: DecodedInstruction) -> None:
        address = decoded.operand & 0x7F
        to_file = bool(decoded.operand >> 7)
        w = self.ac.value
        f = bank.data_memory[address]
        if decoded.opcode == ADDWF:
            result = f + w
        elif decoded.opcode == ANDWF:
            result = f & w
        elif decoded.opcode == CLRF:
            result = 0
        else:
            logger.warning("Unhandled Byte Oriented Opcode: %d", decoded.opcode)
            return
        if to_file:
            bank.data_memory[address] = result & BYTE_MASK
        else:
            self.ac.value = result

    def _execute_bit(
        self, bank: MemoryBank, bank_no: int, decoded: DecodedInstruction, cycles: int
    ) -> int:
        address = decoded.operand
        mask = 1 << (decoded.bit or 0)
        if decoded.opcode == BCF:
            bank.data_memory[address] &= ~mask & BYTE_MASK
        elif decoded.opcode == BSF:
            bank.data_memory[address] |= mask
        elif decoded.opcode == BTFSC:
            if not bank.data_memory[address] & mask:
                _, cycles = self.fetch(cycles, bank_no)
        elif decoded.opcode == BTFSS:
            if bank.data_memory[address] & mask:
                _, cycles = self.fetch(cycles, bank_no)
        else:
            logger.warning("Unhandled Bit Oriented Opcode: %d", decoded.opcode)
        return cycles

    def _execute_literal(self, decoded: DecodedInstruction) -> None:
        literal = decoded.operand
        operation = _LITERAL_OPS.get(decoded.opcode)
        if operation is not None:
            self.ac.value = operation(self.ac.value, literal)
        elif decoded.opcode == GOTO:
            self.pcl.value = literal & 0x7FF
        elif decoded.opcode == CALL:
            logger.warning("CALL instruction not fully implemented.")
        elif decoded.opcode == RETLW:
            self.ac.value = literal
            logger.warning("RETLW instruction not fully implemented (stack missing).")
        else:
            logger.warning("Unhandled Literal/Control Opcode: %d", decoded.opcode)