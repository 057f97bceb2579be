import pytest

from picsim import opcodes
from picsim.opcodes import (
    DecodeError,
    DecodedInstruction,
    InstructionType,
    decode_instruction,
)


def test_addlw_word_decodes_as_byte_oriented():
    decoded = decode_instruction((opcodes.ADDLW << 8) | 0x01)
    assert decoded.kind is InstructionType.BYTE
    assert decoded.opcode == opcodes.ADDLW
    assert decoded.operand == 0x01
    assert decoded.bit is None


def test_clrf_keeps_destination_bit_in_operand():
    decoded = decode_instruction((opcodes.CLRF << 8) | (1 << 7) | 0x20)
    assert decoded.opcode == opcodes.CLRF
    assert decoded.operand == (1 << 7) | 0x20
    assert decoded.operand >> 7 == 1
    assert decoded.operand & 0x7F == 0x20


def test_byte_parts_order():
    decoded = decode_instruction((opcodes.MOVWF << 8) | 0x20)
    assert decoded.parts == (opcodes.MOVWF, 0x20, int(InstructionType.BYTE))


def test_bit_oriented_fields():
    decoded = decode_instruction(0x4000 | (3 << 7) | 0x25)
    assert decoded.kind is InstructionType.BIT
    assert decoded.opcode == 0x10
    assert decoded.operand == 0x25
    assert decoded.bit == 3
    assert decoded.parts == (0x10, 0x25, 3, int(InstructionType.BIT))


def test_call_family_is_literal():
    decoded = decode_instruction(0x8000 | 0x34)
    assert decoded.kind is InstructionType.LITERAL
    assert decoded.opcode == 0x80
    assert decoded.operand == 0x34
    assert len(decoded.parts) == 3


def test_literal_family_c():
    decoded = decode_instruction(0xC0FF)
    assert decoded.kind is InstructionType.LITERAL
    assert decoded.opcode == 0xC0
    assert decoded.operand == 0xFF


@pytest.mark.parametrize("word", [0xD000, 0xE123, 0xFFFF])
def test_undecodable_words_raise(word):
    with pytest.raises(DecodeError):
        decode_instruction(word)


@pytest.mark.parametrize("word", [-1, 0x10000])
def test_out_of_range_word_raises(word):
    with pytest.raises(ValueError):
        decode_instruction(word)


def test_family_boundaries():
    assert all(
        decode_instruction(w).kind is InstructionType.BYTE for w in range(0, 0x4000, 97)
    )
    assert all(
        decode_instruction(w).kind is InstructionType.BIT for w in range(0x4000, 0x8000, 97)
    )
    assert all(
        decode_instruction(w).kind is InstructionType.LITERAL
        for w in range(0x8000, 0xD000, 97)
    )


def test_bit_fields_stay_in_range():
    for word in range(0x4000, 0x8000, 31):
        decoded = decode_instruction(word)
        assert 0 <= decoded.bit <= 7
        assert 0 <= decoded.operand <= 0x7F


def test_decoded_instruction_is_immutable():
    decoded = DecodedInstruction(InstructionType.BYTE, 1, 2)
    with pytest.raises(AttributeError):
        decoded.opcode = 5
    assert decoded.opcode == 1