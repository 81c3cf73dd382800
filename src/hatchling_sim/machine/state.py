"""
Hatchling Machine State
=======================

The single mutable entity of a Hatchling run. The loader populates it, the
CPU owns and mutates it while running, and the dump reads it afterwards.

Register fields are exposed as properties that mask values to their natural
width, so an out-of-range value can never be stored.

Copyright (c) 2025 Hatchling Simulator Contributors
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from .decoder import decode
from .events import StopReason
from .words import (
    BYTE_MASK,
    MEMORY_SIZE,
    WORD_MASK,
    to_signed16,
    to_unsigned16,
)


@dataclass
class Registers:
    """
    Raw register values for snapshotting.

    All values are stored as Python ints but represent:
    - accumulator: signed 16-bit
    - instruction_register: unsigned 16-bit
    - instruction_counter, opcode, operand: unsigned 8-bit
    """
    accumulator: int = 0
    instruction_register: int = 0
    instruction_counter: int = 0
    opcode: int = 0
    operand: int = 0


class MachineState:
    """
    Complete Hatchling machine state.

    Attributes:
        registers: Backing register values (use the properties instead)
        memory: 256 raw 16-bit words
        fatal_error: Set once a fatal run-time error occurs
        fault: Which fatal error froze the machine (None while healthy)

    Example:
        >>> state = MachineState.from_words([0x4002, 0xFF00, 0x0007])
        >>> state.memory[2]
        7
        >>> state.accumulator = -1
        >>> state.accumulator
        -1
    """

    def __init__(self) -> None:
        self.registers = Registers()
        self.memory: List[int] = [0] * MEMORY_SIZE
        self.fatal_error: bool = False
        self.fault: Optional[StopReason] = None

    @classmethod
    def from_words(cls, words: Iterable[int]) -> "MachineState":
        """
        Create a state with memory filled from address 0.

        Words beyond the supplied ones stay zero. Callers are expected to
        have validated the words; the loader does this.

        Raises:
            ValueError: If more than 256 words are supplied
        """
        state = cls()
        for address, word in enumerate(words):
            if address >= MEMORY_SIZE:
                raise ValueError(f"program does not fit in {MEMORY_SIZE} words")
            state.memory[address] = word & WORD_MASK
        return state

    # ========================================
    # Register Properties
    # ========================================

    @property
    def accumulator(self) -> int:
        """Accumulator (signed 16-bit)."""
        return self.registers.accumulator

    @accumulator.setter
    def accumulator(self, value: int) -> None:
        self.registers.accumulator = to_signed16(value)

    @property
    def instruction_counter(self) -> int:
        """Instruction counter (8-bit, wraps at 256)."""
        return self.registers.instruction_counter

    @instruction_counter.setter
    def instruction_counter(self, value: int) -> None:
        self.registers.instruction_counter = value & BYTE_MASK

    @property
    def instruction_register(self) -> int:
        """Most recently fetched instruction word."""
        return self.registers.instruction_register

    @instruction_register.setter
    def instruction_register(self, value: int) -> None:
        # opcode/operand are derived from the instruction register only
        word = value & WORD_MASK
        instruction = decode(word)
        self.registers.instruction_register = word
        self.registers.opcode = instruction.opcode
        self.registers.operand = instruction.operand

    @property
    def opcode(self) -> int:
        """High byte of the instruction register."""
        return self.registers.opcode

    @property
    def operand(self) -> int:
        """Low byte of the instruction register."""
        return self.registers.operand

    # ========================================
    # Memory Access
    # ========================================

    def read_word(self, address: int) -> int:
        """Read the raw (unsigned) word at address."""
        return self.memory[address & BYTE_MASK]

    def read_signed(self, address: int) -> int:
        """Read the word at address as a signed 16-bit value."""
        return to_signed16(self.memory[address & BYTE_MASK])

    def write_word(self, address: int, value: int) -> None:
        """Store the 16-bit pattern of value at address."""
        self.memory[address & BYTE_MASK] = to_unsigned16(value)

    def __repr__(self) -> str:
        return (
            f"MachineState(acc={self.accumulator}, "
            f"ic=${self.instruction_counter:02X}, "
            f"ir=${self.instruction_register:04X}, "
            f"fatal={self.fatal_error})"
        )
