from picsim.cli import build_demo_program, main
from picsim.opcodes import CLRF, InstructionType, decode_instruction


def test_demo_program_has_three_words():
    program = build_demo_program()
    assert len(program) == 3
    assert all(0 <= word <= 0xFFFF for word in program)


def test_demo_program_ends_with_clrf_of_0x20():
    decoded = decode_instruction(build_demo_program()[-1])
    assert decoded.kind is InstructionType.BYTE
    assert decoded.opcode == CLRF
    assert decoded.operand & 0x7F == 0x20
    assert decoded.operand >> 7 == 1


def test_main_prints_report(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Executing test program...")
    assert "Execution finished. Checking register 0x20 in Bank 0:" in out
    assert "Data Memory for Bank 0:" in out
    assert "Addr 0x20: 0" in out.splitlines()


def test_main_accepts_cycle_count(capsys):
    assert main(["--cycles", "1"]) == 0
    out = capsys.readouterr().out
    assert "Addr 0x7f: 0" in out.splitlines()