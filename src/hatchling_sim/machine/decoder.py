"""
Hatchling Instruction Decoder
=============================

Splits a 16-bit instruction word into its 8-bit opcode and 8-bit operand:

    15            8 7             0
    +--------------+--------------+
    |    opcode    |   operand    |
    +--------------+--------------+

The decoder is stateless; every fetch decodes from scratch. The operand is
always a direct memory address, and because it is 8 bits wide it can never
address outside the 256-word memory.

Copyright (c) 2025 Hatchling Simulator Contributors
"""

from dataclasses import dataclass
from typing import Optional

from .opcodes import Opcode
from .words import BYTE_MASK, WORD_MASK


@dataclass(frozen=True)
class Instruction:
    """
    A decoded instruction word.

    Attributes:
        opcode: High byte (0x00-0xFF), not necessarily a defined Opcode
        operand: Low byte (0x00-0xFF), a direct memory address
    """
    opcode: int
    operand: int

    @property
    def word(self) -> int:
        """The 16-bit word this instruction decodes from."""
        return encode(self.opcode, self.operand)

    @property
    def known(self) -> Optional[Opcode]:
        """The defined Opcode, or None for an undefined byte."""
        return Opcode.lookup(self.opcode)

    def __str__(self) -> str:
        op = self.known
        name = op.mnemonic if op is not None else f"?{self.opcode:02X}"
        return f"{name} {self.operand:02X}"


def decode(word: int) -> Instruction:
    """
    Decode a 16-bit instruction word.

    >>> decode(0x1005)
    Instruction(opcode=16, operand=5)
    """
    word &= WORD_MASK
    return Instruction(opcode=word >> 8, operand=word & BYTE_MASK)


def encode(opcode: int, operand: int = 0) -> int:
    """
    Build an instruction word from an opcode and operand.

    Used to write programs in tests and examples without hex literals:

    >>> hex(encode(Opcode.LOAD, 0x20))
    '0x4020'
    """
    return ((int(opcode) & BYTE_MASK) << 8) | (operand & BYTE_MASK)
