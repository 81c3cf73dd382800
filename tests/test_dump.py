"""
Machine Dump Unit Tests
=======================

Tests for the post-run register and memory dump layout.

Copyright (c) 2025 Hatchling Simulator Contributors
"""

from hatchling_sim.dump import format_dump, format_memory, format_registers
from hatchling_sim.machine import MachineState


class TestRegisters:
    """Test the register block."""

    def test_fresh_state(self):
        assert format_registers(MachineState()) == [
            "REGISTERS",
            "ACC         0000",
            "InstCtr       00",
            "InstReg     0000",
            "OpCode        00",
            "Operand       00",
        ]

    def test_negative_accumulator_in_twos_complement(self):
        state = MachineState()
        state.accumulator = -2
        state.instruction_counter = 0x1A
        state.instruction_register = 0x4120

        lines = format_registers(state)
        assert lines[1] == "ACC         FFFE"
        assert lines[2] == "InstCtr       1A"
        assert lines[3] == "InstReg     4120"
        assert lines[4] == "OpCode        41"
        assert lines[5] == "Operand       20"


class TestMemory:
    """Test the 16x16 memory grid."""

    def test_header(self):
        lines = format_memory(MachineState())
        assert lines[0] == "Memory:"
        assert lines[1].startswith("        0       1       2")
        assert lines[1].endswith("E       F")

    def test_rows(self):
        state = MachineState.from_words([0x4005, 0x1006, 0xFF00])
        state.write_word(0xFF, 0xBEEF)

        lines = format_memory(state)
        assert len(lines) == 18
        assert lines[2].startswith(" 0   4005    1006    FF00    0000")
        assert lines[3].startswith("10   0000")
        assert lines[17].startswith("F0   0000")
        assert lines[17].endswith("0000    BEEF")

    def test_columns_line_up_with_header(self):
        lines = format_memory(MachineState.from_words([0xAAAA] * 16))
        header, row = lines[1], lines[2]
        # Column labels sit above the last digit of each word
        for col in range(16):
            label_pos = header.index(f"{col:X}", 4 + col * 8)
            assert row[label_pos] == "A"
            assert row[label_pos - 3:label_pos + 1] == "AAAA"


class TestDump:
    """Test the complete dump."""

    def test_layout(self):
        lines = format_dump(MachineState()).split("\n")
        assert len(lines) == 25
        assert lines[0] == "REGISTERS"
        assert lines[6] == ""
        assert lines[7] == "Memory:"

    def test_no_trailing_newline(self):
        assert not format_dump(MachineState()).endswith("\n")
