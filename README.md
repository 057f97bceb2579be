# picsim

A small simulator for a PIC16-style microcontroller core. It models the
working register (`AC`), the program counter (`PCL`), `STATUS` and the other
special function registers, and four memory banks, each holding 128 words of
program memory and 128 bytes of data memory. The active bank is taken from the
RP1:RP0 bits (bits 6:5) of `STATUS`; after a reset `STATUS` is `0b00011000`,
which selects bank 0.

## Modules

- `picsim.register`: `Register`, an 8-bit value that wraps on assignment.
- `picsim.memory`: `MemoryBank` with `program_memory`, `data_memory`, a
  `registers` map, and `clear()`; `MAX_MEM` is 128.
- `picsim.opcodes`: the opcode constants, `decode_instruction()`,
  `DecodedInstruction`, `InstructionType` and `DecodeError`.
- `picsim.cpu`: `CPU` and `SimulatorError`.
- `picsim.cli`: the `picsim` command and `build_demo_program()`.

## How instructions are decoded and executed

`decode_instruction(word)` sorts a 16-bit word by its top bits:

- top bits `00`: byte-oriented; opcode is `word >> 8`, operand is the low
  byte (bit 7 is the destination bit: 0 for `AC`, 1 for the file address).
- `0x4000`–`0x7FFF`: bit-oriented; opcode is `word >> 10`, operand is the low
  seven bits, `bit` is bits 9:7.
- top bits `10`, or `0xC000`–`0xCFFF`: literal/control; opcode is `word >> 8`,
  operand is the low byte.
- anything else raises `DecodeError`. Words outside `0..0xFFFF` raise
  `ValueError`.

When run, the byte-oriented `ADDWF`, `ANDWF` and `CLRF` (with destination bit
0 it clears `AC`) take effect on the current bank's data memory. The executor
also knows `BCF`, `BSF`, `BTFSC`, `BTFSS`, `MOVLW`, `ADDLW`, `ANDLW`, `IORLW`,
`SUBLW`, `XORLW`, `GOTO`, `CALL` and `RETLW`, but the opcode fields that the
decoder produces for bit-oriented and literal words never equal those
constants, and a literal opcode such as `ADDLW << 8` has top bits `00` and so
decodes as a byte-oriented word. Every instruction other than the three above
is therefore logged as unhandled (through the `logging` module) and otherwise
ignored.

## What it does not do

- Arithmetic does not update the status flags.
- There is no call stack; `CALL` and `RETLW` are not carried out.
- Named registers are not mapped to data memory addresses; byte-oriented
  instructions work on the bank's `data_memory` directly.

## Installation

```
pip install .
```

## Command line

```
picsim
picsim --cycles 5
```

This loads a three-word demo program into bank 0 (`ADDLW 0x01`, `MOVWF 0x20`,
`CLRF 0x20`, as built by `build_demo_program()`), runs it for the given number
of cycles (3 by default) and prints the data memory of bank 0. Running past the
end of program memory stops with `SimulatorError`.

## Library use

```python
from picsim.cpu import CPU
from picsim.opcodes import ADDWF, decode_instruction

cpu = CPU()
cpu.banks[0].data_memory[0x20] = 5
cpu.ac.value = 3
cpu.edit_program_memory(0, 0, (ADDWF << 8) | 0x80 | 0x20)  # ADDWF 0x20, result to file
left = cpu.execute(1)                                      # returns the cycles left

print(cpu.banks[0].data_memory[0x20])   # 8
print(decode_instruction(0x07A0))
print(cpu.bank_data_info(0))
```

`CPU` also offers `reset()`, `fetch(cycles, bank_no)`, which returns the word
at `PCL` and the cycles left, and `set_register_value` / `get_register_value`,
which take a bank number or a `MemoryBank` and a register name. Reading a name
the bank does not map gives 0; writing one raises `KeyError`.

`CPU` raises `SimulatorError` for an invalid bank number, a program memory
address out of range, `PCL` past the end of program memory, or a word that
cannot be decoded during `execute`.

## Running the tests

```
pip install .[test]
pytest
```