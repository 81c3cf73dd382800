"""
Word Model, Decoder and Machine State Unit Tests
================================================

Tests for signed/unsigned reinterpretation, instruction decoding and the
register masking done by MachineState.

Copyright (c) 2025 Hatchling Simulator Contributors
"""

import pytest

from hatchling_sim.machine import (
    Instruction,
    MachineState,
    MEMORY_SIZE,
    Opcode,
    decode,
    encode,
    fits_signed16,
    format_word,
    parse_hex,
    to_signed16,
    to_unsigned16,
)


# =============================================================================
# Word Reinterpretation
# =============================================================================

class TestWords:
    """Test signed/unsigned word helpers."""

    def test_to_signed16(self):
        """High bit set means negative."""
        assert to_signed16(0x0000) == 0
        assert to_signed16(0x7FFF) == 32767
        assert to_signed16(0x8000) == -32768
        assert to_signed16(0xFFFF) == -1
        assert to_signed16(0xFFFE) == -2

    def test_to_signed16_ignores_high_bits(self):
        """Only the low 16 bits are considered."""
        assert to_signed16(0x1FFFF) == -1
        assert to_signed16(0x10005) == 5

    def test_to_unsigned16(self):
        """Negative values become their two's-complement pattern."""
        assert to_unsigned16(-1) == 0xFFFF
        assert to_unsigned16(-32768) == 0x8000
        assert to_unsigned16(32767) == 0x7FFF

    def test_fits_signed16_boundaries(self):
        """Range check is inclusive at both ends."""
        assert fits_signed16(-32768)
        assert fits_signed16(32767)
        assert not fits_signed16(-32769)
        assert not fits_signed16(32768)

    def test_format_word(self):
        """Words format as 4 hex digits in two's complement."""
        assert format_word(0) == "0000"
        assert format_word(0x1005) == "1005"
        assert format_word(-2) == "FFFE"
        assert format_word(0xabcd) == "ABCD"


class TestParseHex:
    """Test hexadecimal token parsing."""

    def test_plain_and_prefixed(self):
        assert parse_hex("1005") == 0x1005
        assert parse_hex("ff00") == 0xFF00
        assert parse_hex("0x10") == 0x10

    def test_sign_and_whitespace(self):
        assert parse_hex(" -7fff\n") == -32767
        assert parse_hex("+10") == 16

    @pytest.mark.parametrize("token", ["", "   ", "12G4", "xyz", "1_0", "--1", "0x"])
    def test_rejects_non_hex(self, token):
        with pytest.raises(ValueError):
            parse_hex(token)

    @pytest.mark.parametrize("token", ["\u0661\u0660", "\uff11\uff10", "\uff26\uff26"])
    def test_rejects_non_ascii_digits(self, token):
        """Arabic-Indic and fullwidth digits are not hex words."""
        with pytest.raises(ValueError):
            parse_hex(token)


# =============================================================================
# Decoder
# =============================================================================

class TestDecoder:
    """Test instruction word decoding."""

    def test_decode_splits_bytes(self):
        """High byte is opcode, low byte is operand."""
        instruction = decode(0x1005)
        assert instruction.opcode == 0x10
        assert instruction.operand == 0x05

    def test_decode_extremes(self):
        assert decode(0x0000) == Instruction(0x00, 0x00)
        assert decode(0xFFFF) == Instruction(0xFF, 0xFF)

    def test_encode(self):
        """encode builds the word from opcode and operand."""
        assert encode(Opcode.LOAD, 0x20) == 0x4020
        assert encode(Opcode.HALT) == 0xFF00
        assert encode(0x99, 0x01) == 0x9901

    def test_instruction_word(self):
        assert decode(0x4120).word == 0x4120

    def test_known_opcode(self):
        assert decode(0x2100).known is Opcode.ORR
        assert decode(0x9900).known is None

    def test_str(self):
        assert str(decode(0x4020)) == "LOAD 20"
        assert str(decode(0x9900)) == "?99 00"


class TestOpcode:
    """Test opcode table."""

    def test_byte_values(self):
        """Opcode bytes match the Hatchling instruction set."""
        assert Opcode.ADD == 0x10
        assert Opcode.MOD == 0x14
        assert Opcode.LSL == 0x26
        assert Opcode.BZRO == 0x33
        assert Opcode.STOR == 0x41
        assert Opcode.WRTE == 0x51
        assert Opcode.HALT == 0xFF

    def test_lookup(self):
        assert Opcode.lookup(0x30) is Opcode.B
        assert Opcode.lookup(0x15) is None
        assert Opcode.lookup(0x00) is None

    def test_instruction_set_size(self):
        """21 defined opcodes; everything else is undefined."""
        assert len(Opcode) == 21


# =============================================================================
# Machine State
# =============================================================================

class TestMachineState:
    """Test register masking and memory access."""

    def test_initial_state(self):
        """New state is all zero with no fatal error."""
        state = MachineState()
        assert state.accumulator == 0
        assert state.instruction_counter == 0
        assert state.instruction_register == 0
        assert state.opcode == 0
        assert state.operand == 0
        assert state.memory == [0] * MEMORY_SIZE
        assert state.fatal_error is False
        assert state.fault is None

    def test_accumulator_is_signed_16bit(self):
        state = MachineState()
        state.accumulator = 0x8000
        assert state.accumulator == -32768
        state.accumulator = 0xFFFF
        assert state.accumulator == -1
        state.accumulator = 32767
        assert state.accumulator == 32767

    def test_counter_is_8bit(self):
        state = MachineState()
        state.instruction_counter = 0xFF
        assert state.instruction_counter == 0xFF
        state.instruction_counter = 0x100
        assert state.instruction_counter == 0x00

    def test_instruction_register_drives_opcode_and_operand(self):
        state = MachineState()
        state.instruction_register = 0x4120
        assert state.opcode == 0x41
        assert state.operand == 0x20

    def test_from_words(self):
        state = MachineState.from_words([0x4002, 0xFF00, 0x0007])
        assert state.memory[:4] == [0x4002, 0xFF00, 0x0007, 0x0000]
        assert len(state.memory) == MEMORY_SIZE

    def test_from_words_full_memory(self):
        state = MachineState.from_words(range(MEMORY_SIZE))
        assert state.memory[0xFF] == 0xFF

    def test_from_words_too_many(self):
        with pytest.raises(ValueError):
            MachineState.from_words([0] * (MEMORY_SIZE + 1))

    def test_signed_and_raw_reads(self):
        state = MachineState.from_words([0xFFFE])
        assert state.read_word(0) == 0xFFFE
        assert state.read_signed(0) == -2

    def test_write_word_stores_bit_pattern(self):
        state = MachineState()
        state.write_word(0x10, -1)
        assert state.memory[0x10] == 0xFFFF
